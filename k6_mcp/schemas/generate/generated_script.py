from typing import List, Optional
from pydantic import BaseModel

from k6_mcp.schemas.generate.generate_request import PlannedStage


class GeneratedScript(BaseModel):
    """템플릿 엔진 출력"""
    source_text: str
    stages: Optional[List[PlannedStage]] = None   # basic 소스에서만 채워짐
    placeholder: bool = False                     # har/openapi 변환 미구현 스크립트 여부


class PersistedArtifact(BaseModel):
    """저장된 스크립트 파일 정보"""
    absolute_path: str
    file_name: str
    directory: str
