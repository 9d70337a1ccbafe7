from enum import Enum

class BaseCode(Enum):
    def message(self) -> str:
        return self.value
