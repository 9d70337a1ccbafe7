"""
파일 저장을 위한 범용 유틸리티 클래스
생성 스크립트를 안전하게(전부 쓰이거나 전혀 쓰이지 않도록) 저장
"""
import os
import tempfile
from pathlib import Path
import logging

logger = logging.getLogger(__name__)


class FileWriter:
    """범용 파일 저장을 위한 유틸리티 클래스"""

    @staticmethod
    def write_to_path(content: str, filename: str, base_path: str) -> str:
        """
        지정된 경로에 파일을 저장

        같은 디렉터리의 임시 파일에 먼저 쓴 뒤 이름을 바꾸므로
        실패하더라도 일부만 쓰인 파일이 남지 않음

        Args:
            content: 저장할 파일 내용
            filename: 저장할 파일명
            base_path: 기본 저장 경로

        Returns:
            str: 저장된 파일의 전체 경로

        Raises:
            OSError: 디렉터리 생성 또는 파일 저장 실패시 (인코딩 실패 포함)
        """
        target_path = Path(base_path)

        # 디렉터리 생성 (존재하지 않으면)
        target_path.mkdir(parents=True, exist_ok=True)

        file_path = target_path / filename
        temp_name = None

        try:
            with tempfile.NamedTemporaryFile(
                'w', encoding='utf-8', dir=target_path, prefix=f".{filename}.", suffix=".tmp", delete=False
            ) as temp_file:
                temp_name = temp_file.name
                temp_file.write(content)
            os.replace(temp_name, file_path)

            logger.info(f"File saved: {file_path}")
            return str(file_path.resolve())

        except Exception as e:
            # 인코딩 오류 등 쓰기 도중 실패도 임시 파일을 남기지 않음
            logger.error(f"Failed to save file - path: {file_path}, error: {e}")
            if temp_name and os.path.exists(temp_name):
                os.remove(temp_name)
            raise OSError(f"Failed to save file {file_path}: {e}") from e

    @staticmethod
    def read_from_path(file_path: str) -> str:
        """
        지정된 경로에서 파일을 읽음

        Raises:
            FileNotFoundError: 파일이 존재하지 않을 때
            OSError: 파일 읽기 실패시
            UnicodeDecodeError: UTF-8 이 아닌 파일일 때
        """
        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                content = f.read()

            logger.info(f"File read: {file_path}")
            return content

        except FileNotFoundError:
            logger.error(f"File not found: {file_path}")
            raise
        except OSError as e:
            logger.error(f"Failed to read file - path: {file_path}, error: {e}")
            raise
