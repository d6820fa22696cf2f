# qa_service/schemas.py

from datetime import datetime
from typing import Generic, List, Literal, Optional, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, StringConstraints, field_validator
from typing_extensions import Annotated

from .models import MAX_ID

T = TypeVar("T")

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
BCRYPT_MAX_BYTES = 72


def _fits_bcrypt(value):
    if len(value.encode("utf-8")) > BCRYPT_MAX_BYTES:
        raise ValueError(f"must be at most {BCRYPT_MAX_BYTES} bytes")
    return value


Title = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
Body = Annotated[str, StringConstraints(min_length=1, max_length=5000)]
Username = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=50)]
Email = Annotated[str, StringConstraints(strip_whitespace=True, to_lower=True, pattern=EMAIL_PATTERN)]
Password = Annotated[str, StringConstraints(min_length=6), AfterValidator(_fits_bcrypt)]
RefId = Annotated[int, Field(ge=1, le=MAX_ID)]


def _clean_tags(tags):
    if tags is None:
        return None
    return [t.strip() for t in tags if t and t.strip()]


def _reject_blank(value):
    if value is not None and not value.strip():
        raise ValueError("must not be blank")
    return value


# --- envelopes -------------------------------------------------------------

class Envelope(BaseModel, Generic[T]):
    success: bool = True
    data: T


class ListEnvelope(BaseModel, Generic[T]):
    success: bool = True
    count: int
    data: List[T]


class EmptyEnvelope(BaseModel):
    success: bool = True
    data: dict = Field(default_factory=dict)


# --- users / auth ----------------------------------------------------------

class UserBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    reputation: int


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    reputation: int
    created_at: datetime


class UserCreate(BaseModel):
    username: Username
    email: Email
    password: Password


class UserUpdate(BaseModel):
    username: Optional[Username] = None
    email: Optional[Email] = None
    password: Optional[Password] = None
    reputation: Optional[int] = Field(None, ge=0)


class LoginRequest(BaseModel):
    email: Email
    password: str = Field(min_length=1)


class AuthResponse(BaseModel):
    success: bool = True
    token: str
    token_type: str = "bearer"
    user: UserResponse


# --- categories ------------------------------------------------------------

class CategoryBrief(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str
    color: str
    icon: str


class CategoryResponse(CategoryBrief):
    description: str
    created_at: datetime


class CategoryCreate(BaseModel):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
    description: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
    color: Optional[str] = None
    icon: Optional[str] = None


# --- questions -------------------------------------------------------------

class QuestionCreate(BaseModel):
    title: Title
    body: Body
    category: RefId
    tags: List[str] = Field(default_factory=list)

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, value):
        return _clean_tags(value)

    @field_validator("body")
    @classmethod
    def body_not_blank(cls, value):
        return _reject_blank(value)


class QuestionUpdate(BaseModel):
    title: Optional[Title] = None
    body: Optional[Body] = None
    category: Optional[RefId] = None
    tags: Optional[List[str]] = None

    @field_validator("tags")
    @classmethod
    def strip_tags(cls, value):
        return _clean_tags(value)

    @field_validator("body")
    @classmethod
    def body_not_blank(cls, value):
        return _reject_blank(value)


class QuestionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    body: str
    category: CategoryBrief
    author: UserBrief
    views: int
    upvotes: List[int]
    downvotes: List[int]
    vote_count: int
    tags: List[str]
    is_solved: bool
    accepted_answer: Optional[int] = Field(None, validation_alias="accepted_answer_id")
    created_at: datetime
    updated_at: datetime


class VoteRequest(BaseModel):
    vote: Literal["up", "down"]


# --- answers ---------------------------------------------------------------

class AnswerCreate(BaseModel):
    body: Body

    @field_validator("body")
    @classmethod
    def body_not_blank(cls, value):
        return _reject_blank(value)


class AnswerUpdate(AnswerCreate):
    pass


class AnswerResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    body: str
    question: int = Field(validation_alias="question_id")
    author: UserBrief
    upvotes: List[int]
    downvotes: List[int]
    vote_count: int
    is_accepted: bool
    created_at: datetime
    updated_at: datetime


# --- items -----------------------------------------------------------------

class ItemCreate(BaseModel):
    title: Title
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    user: Optional[RefId] = None


class ItemUpdate(BaseModel):
    title: Optional[Title] = None
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    user: Optional[RefId] = None


class ItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    price: Optional[float] = None
    user: Optional[UserBrief] = None
    created_at: datetime
