"""
Pydantic schemas for request/response validation.
"""

from pydantic import BaseModel, Field, EmailStr, field_validator
from typing import Optional, Dict, Any, Generic, TypeVar, List
from datetime import datetime

from vidhisahayak.core.constants import AUTO_LANGUAGE
from vidhisahayak.services.language import LANG_NAMES

# Generic type for response data
T = TypeVar('T')


class Metadata(BaseModel):
    """Standard metadata for API responses."""
    statusCode: int = Field(..., description="HTTP status code")
    errors: List[str] = Field(default_factory=list, description="List of error messages")
    executionTime: float = Field(..., description="Request execution time in seconds")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")


class StandardResponse(BaseModel, Generic[T]):
    """Standard API response wrapper."""
    data: T = Field(..., description="Response data")
    metadata: Metadata = Field(..., description="Response metadata")
    success: int = Field(..., description="Success indicator (1 for success, 0 for failure)")


class ErrorResponse(BaseModel):
    """Error response schema."""
    message: str = Field(..., description="Error message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional error details")


class SuccessResponse(BaseModel):
    """Success response schema."""
    message: str = Field(..., description="Success message")
    details: Optional[Dict[str, Any]] = Field(None, description="Additional success details")


# Chat
class ChatRequest(BaseModel):
    """Input schema for the chat endpoint."""
    message: str = Field(..., description="User message, typed or transcribed from voice")
    session_id: Optional[str] = Field(None, description="Existing chat session to continue")
    lang: Optional[str] = Field(None, description="Language chosen by the client, or 'auto'")

    @field_validator('lang')
    @classmethod
    def validate_lang(cls, v):
        if v is not None and v != AUTO_LANGUAGE and v not in LANG_NAMES:
            raise ValueError(f"Unsupported language: {v}")
        return v


class ProvidersConfigured(BaseModel):
    """Which providers have credentials configured."""
    gemini: bool
    perplexity: bool
    openai: bool


class CategoryMatchResponse(BaseModel):
    """A legal category matched to a query."""
    slug: str
    name: str
    confidence: float
    matched_terms: List[str] = Field(default_factory=list)


class ChatReply(BaseModel):
    """Response schema for the chat endpoint."""
    reply: str = Field(..., description="Assistant reply")
    session_id: Optional[str] = Field(None, description="Chat session ID, null when running stateless")
    providers: ProvidersConfigured
    provider_used: str = Field(..., description="gemini, perplexity, openai or none")
    model_used: Optional[str] = Field(None, description="Model that produced the reply")
    detected_lang: str = Field(..., description="Language the reply was requested in")
    category: Optional[CategoryMatchResponse] = Field(None, description="Legal category matched to the message")


class ChatMessageResponse(BaseModel):
    """Schema for chat message responses."""
    id: int
    session_id: str
    role: str
    content: str
    language: Optional[str]
    provider: Optional[str]
    created_at: Optional[str]


class ChatSessionResponse(BaseModel):
    """Schema for chat session responses."""
    id: str
    user_id: Optional[int]
    title: Optional[str]
    created_at: Optional[str]
    updated_at: Optional[str]
    message_count: int = Field(default=0, description="Number of messages in the session")


class ChatSessionWithMessages(ChatSessionResponse):
    """Schema for chat session with messages."""
    messages: List[ChatMessageResponse] = Field(default_factory=list, description="Messages in the session")


class ChatSessionListResponse(BaseModel):
    """Schema for listing chat sessions."""
    sessions: List[ChatSessionResponse]
    total: int
    page: int
    per_page: int


class ChatSessionUpdate(BaseModel):
    """Schema for renaming a chat session."""
    title: str = Field(..., min_length=1, max_length=255)


class LanguageOption(BaseModel):
    code: str
    label: str


# Categories and guidance
class GuidanceResponse(BaseModel):
    where_to_get: List[str]
    type_required: List[str]
    verification_contacts: List[str]
    submission_offices: List[str]
    print_guidance: List[str]
    steps: List[str]


class CategoryResponse(BaseModel):
    slug: str
    name: str
    image: Optional[str] = None
    create_hint: Optional[str] = None


class CategoryDetailResponse(CategoryResponse):
    guidance: Optional[GuidanceResponse] = None


class CategoryMatchRequest(BaseModel):
    query: str = Field(..., min_length=1, max_length=4000)


# Documents
class TemplateFieldResponse(BaseModel):
    key: str
    label: str
    placeholder: Optional[str] = None


class DocumentDetailsResponse(BaseModel):
    slug: str
    name: str
    create_hint: Optional[str] = None
    guidance: List[str]
    where_to_get: List[str]
    types_required: List[str]
    verification: List[str]
    submission: List[str]
    printing: List[str]
    filling: List[str]
    fields: List[TemplateFieldResponse] = Field(default_factory=list)


class CommonFields(BaseModel):
    applicant_name: str = Field(default="", max_length=200)
    address: str = Field(default="", max_length=500)
    date: Optional[str] = Field(default=None, description="ISO date, defaults to today")
    city: str = Field(default="", max_length=100)


class DocumentRenderRequest(BaseModel):
    common: CommonFields = Field(default_factory=CommonFields)
    fields: Dict[str, str] = Field(default_factory=dict)


class RenderedDocumentResponse(BaseModel):
    slug: str
    title: str
    lines: List[str]
    text: str


# Lawyers
class LawyerResponse(BaseModel):
    id: str
    name: str
    practices: List[str]
    experience_years: int
    location: str
    fee: int


class LawyerListResponse(BaseModel):
    items: List[LawyerResponse]
    source: str = Field(..., description="'database' or 'sample'")


class VerificationUpdate(BaseModel):
    verification_status: str = Field(..., description="pending, verified or rejected")


# Search
class CategorySearchHit(BaseModel):
    slug: str
    name: str
    snippet: str


class SearchResponse(BaseModel):
    query: str
    categories: List[CategorySearchHit]
    lawyers: List[LawyerResponse]


# Text to speech
class TTSRequest(BaseModel):
    text: Optional[str] = Field(None, description="Text to speak")
    lang: Optional[str] = Field(None, description="BCP-47 language code, defaults to en-IN")
    voice_name: Optional[str] = Field(None, description="Specific Google voice name")


# Users
class UserCreate(BaseModel):
    """Schema for user registration. Lawyers also submit their practice details."""
    full_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=8, max_length=128, description="Password")
    role: str = Field(default="user", description="'user' or 'lawyer'")
    preferred_language: Optional[str] = Field(default="English", max_length=50)

    # Lawyer onboarding
    license_number: Optional[str] = Field(None, max_length=100)
    education: Optional[str] = Field(None, max_length=1000)
    experience_years: Optional[int] = Field(None, ge=0, le=80)
    practicing_court: Optional[str] = Field(None, max_length=255)
    office_location: Optional[str] = Field(None, max_length=100)
    contact_info: Optional[str] = Field(None, max_length=255)
    practices: List[str] = Field(default_factory=list)
    fee: Optional[int] = Field(None, ge=0)

    @field_validator('role')
    @classmethod
    def validate_role(cls, v):
        if v not in ("user", "lawyer"):
            raise ValueError("Role must be 'user' or 'lawyer'")
        return v


class UserResponse(BaseModel):
    """Schema for user responses."""
    id: int
    email: str
    full_name: Optional[str]
    role: str
    preferred_language: Optional[str]
    is_active: bool
    created_at: Optional[str]
    lawyer_verification_status: Optional[str] = None


class Token(BaseModel):
    """Schema for authentication tokens."""
    access_token: str
    token_type: str = "bearer"


class LoginRequest(BaseModel):
    """Schema for login requests."""
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., description="Password")
