from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ContentType(str, Enum):
    MARKETING = "Marketing Copy"
    BLOG_POST = "Blog Post"
    SOCIAL_MEDIA = "Social Media Caption"


class Tone(str, Enum):
    PROFESSIONAL = "Professional"
    CASUAL = "Casual"
    WITTY = "Witty"
    ENTHUSIASTIC = "Enthusiastic"
    FORMAL = "Formal"


class Length(str, Enum):
    # The word count is a hint for the model, nothing enforces it.
    SHORT = "Short (approx. 50 words)"
    MEDIUM = "Medium (approx. 150 words)"
    LONG = "Long (approx. 300 words)"


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    content_type: ContentType
    prompt: str
    tone: Tone
    length: Length


class Success(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    text: str


class Failure(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    message: str


GenerationOutcome = Annotated[Union[Success, Failure], Field(discriminator="kind")]


class SessionState(BaseModel):
    content_type: ContentType = ContentType.MARKETING
    prompt: str = ""
    tone: Tone = Tone.PROFESSIONAL
    length: Length = Length.MEDIUM
    is_busy: bool = False
    last_outcome: GenerationOutcome | None = None
    clipboard_confirmed: bool = False
