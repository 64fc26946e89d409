"""
Data models for the prompt-to-preview studio.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field


MODEL_ID = "meta-llama/llama-4-scout-17b-16e-instruct"


class ProjectType(str, Enum):
    """Kind of project the user is describing."""
    GAME = "game"
    WEBSITE = "website"


class Theme(str, Enum):
    """Colour palette used when drawing the studio."""
    DARK = "dark"
    LIGHT = "light"

    def toggled(self) -> "Theme":
        return Theme.LIGHT if self == Theme.DARK else Theme.DARK


class StudioStatus(str, Enum):
    """Lifecycle of the studio controller."""
    IDLE = "idle"
    GENERATING = "generating"
    READY = "ready"
    ERROR = "error"


class ErrorKind(str, Enum):
    """Failure categories surfaced to the user."""
    VALIDATION = "validation"
    API = "api"
    CLIPBOARD = "clipboard"
    ARCHIVE = "archive"


class NoticeLevel(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class Notice(BaseModel):
    """User-visible message returned by a controller handler."""
    level: NoticeLevel
    title: str
    message: str

    @classmethod
    def success(cls, message: str) -> "Notice":
        return cls(level=NoticeLevel.SUCCESS, title="Success!", message=message)

    @classmethod
    def error(cls, message: str) -> "Notice":
        return cls(level=NoticeLevel.ERROR, title="Error", message=message)

    @property
    def is_error(self) -> bool:
        return self.level == NoticeLevel.ERROR


class ExamplePrompt(BaseModel):
    """Quick-start prompt template offered in the examples panel."""
    title: str
    description: str
    prompt: str
    project_type: ProjectType
    icon: str

    class Config:
        frozen = True


class GenerationRequest(BaseModel):
    """Single outbound generation call."""
    prompt_text: str
    credential: str = Field(repr=False, exclude=True)
    model_id: str = MODEL_ID


class GeneratedCode(BaseModel):
    """Code returned by the model, with the metadata of the call that produced it."""
    code: str
    model_name: str = MODEL_ID
    generation_timestamp: datetime = Field(default_factory=datetime.now)
    prompt_tokens: Optional[int] = None
    completion_tokens: Optional[int] = None
    generation_metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def total_tokens(self) -> Optional[int]:
        if self.prompt_tokens is None or self.completion_tokens is None:
            return None
        return self.prompt_tokens + self.completion_tokens


class GenerationSuccess(BaseModel):
    """Successful generation result."""
    generated: GeneratedCode

    @property
    def ok(self) -> bool:
        return True

    @property
    def code(self) -> str:
        return self.generated.code


class GenerationFailure(BaseModel):
    """Failed generation result."""
    kind: ErrorKind = ErrorKind.API
    message: str
    status_code: Optional[int] = None

    @property
    def ok(self) -> bool:
        return False


GenerationResult = Union[GenerationSuccess, GenerationFailure]
