"""
Data models and validation schemas for the LifeSave health assistant.

This module contains Pydantic models for API request and response validation,
shared by the chat assistant, the symptom checker and the dataset endpoints.
"""

import re
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator

from .records import DatasetStatistics, Level

MAX_MESSAGE_LENGTH = 1000

# Markup that must never reach the matcher or be echoed back
SUSPICIOUS_PATTERNS = [
    r'<script[^>]*>.*?</script>',
    r'javascript:',
    r'on\w+\s*=',
]


def _clean_text(value: str, field_label: str) -> str:
    """Strip and validate free-text input shared by chat and symptom fields."""
    if not value or not value.strip():
        raise ValueError(f'{field_label} cannot be empty')

    text = value.strip()

    if len(text) > MAX_MESSAGE_LENGTH:
        raise ValueError(
            f'{field_label} is too long. Please keep it under {MAX_MESSAGE_LENGTH} characters.'
        )

    for pattern in SUSPICIOUS_PATTERNS:
        if re.search(pattern, text, re.IGNORECASE):
            raise ValueError(f'{field_label} contains invalid content')

    return text


class ChatIn(BaseModel):
    """
    Model for chat message requests.

    Validates the free-text message sent to the chat assistant.
    """
    message: str = Field(
        ...,
        min_length=1,
        max_length=MAX_MESSAGE_LENGTH,
        description="User's chat message",
        examples=["I have a headache and feel tired"]
    )

    @field_validator('message')
    @classmethod
    def validate_message(cls, v):
        """Validate chat message content."""
        return _clean_text(v, 'Message')


class ChatOut(BaseModel):
    """Model for chat assistant replies (Markdown formatted)."""
    reply: str = Field(
        ...,
        description="Assistant's response to the user message",
        examples=["For headache: This could indicate tension headache or migraine."]
    )


class SymptomInput(BaseModel):
    """
    Model for symptom checker requests.

    ``language`` is accepted for client compatibility; analysis always runs
    on the raw symptom text.
    """
    symptoms: str = Field(
        ...,
        min_length=1,
        max_length=MAX_MESSAGE_LENGTH,
        description="Free-text description of the user's symptoms",
        examples=["runny nose, sneezing and a sore throat"]
    )
    language: str = Field(
        "en",
        max_length=10,
        description="Client interface language code",
        examples=["en"]
    )

    @field_validator('symptoms')
    @classmethod
    def validate_symptoms(cls, v):
        return _clean_text(v, 'Symptoms')


class PredictionResult(BaseModel):
    """Condition predicted by the symptom checker along with care guidance."""
    disease: str
    confidence: int = Field(..., ge=0, le=100)
    description: str
    medications: List[str] = Field(default_factory=list)
    side_effects: List[str] = Field(default_factory=list)
    precautions: List[str] = Field(default_factory=list)
    diet: List[str] = Field(default_factory=list)
    exercise: List[str] = Field(default_factory=list)


class SymptomCheckOut(BaseModel):
    """
    Model for symptom checker responses.

    Exactly one of ``message`` (emergency) or ``prediction`` is set.
    """
    emergency: bool = False
    message: Optional[str] = None
    prediction: Optional[PredictionResult] = None


class SymptomListIn(BaseModel):
    """Model for analysing a list of selected symptom names."""
    symptoms: List[str] = Field(
        ...,
        min_length=1,
        description="Selected symptom names",
        examples=[["Fever", "Cough"]]
    )

    @field_validator('symptoms')
    @classmethod
    def validate_symptoms(cls, v):
        cleaned = [s.strip() for s in v if s and s.strip()]
        if not cleaned:
            raise ValueError('Select at least one symptom')
        return cleaned


class SymptomListAnalysis(BaseModel):
    analysis: str
    urgency: Level
    recommendations: List[str]


class AvailableSymptomsOut(BaseModel):
    symptoms: List[str]


class PatientProfile(BaseModel):
    """Optional patient details used for personalised recommendations."""
    age: Optional[int] = Field(None, ge=0, le=130)
    sex: Optional[str] = None
    conditions: List[str] = Field(default_factory=list)
    extra: Dict[str, Any] = Field(default_factory=dict)


class PersonalizedRecommendations(BaseModel):
    lifestyle: List[str]
    nutrition: List[str]
    preventive: List[str]


class DatasetLoadIn(BaseModel):
    """Model for loading a custom dataset from a URL or local path."""
    source: str = Field(
        ...,
        min_length=1,
        description="http(s) URL or file path of a dataset JSON document",
        examples=["https://example.com/health-dataset.json"]
    )

    @field_validator('source')
    @classmethod
    def validate_source(cls, v):
        if not v or not v.strip():
            raise ValueError('Source is required')
        return v.strip()


class DatasetStatusOut(BaseModel):
    loaded: bool
    stats: DatasetStatistics


SeverityLabel = Literal["Mild", "Moderate", "Severe"]


class SelectedSymptom(BaseModel):
    """A symptom chosen in the interactive selector."""
    name: str
    severity: SeverityLabel = "Mild"
    duration: str = "1 day"
    selected: bool = True
