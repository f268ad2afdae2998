"""
Dataset record types for the LifeSave health assistant.

These are flat records built once when a dataset is loaded and only read
afterwards. List fields default to empty.
"""

from typing import List, Literal

from pydantic import BaseModel, Field

Severity = Literal["mild", "moderate", "severe"]
Level = Literal["low", "moderate", "high"]
PrecautionCategory = Literal["general", "emergency", "lifestyle"]
WorkoutCategory = Literal["cardio", "strength", "flexibility", "recovery"]
DietCategory = Literal["nutrition", "therapeutic", "preventive"]


class SymptomData(BaseModel):
    """A single symptom with its likely conditions and advice."""
    symptom: str = ""
    description: str = ""
    severity: Severity = "mild"
    urgency: Level = "low"
    conditions: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    emergency_indicators: List[str] = Field(default_factory=list)
    precautions: List[str] = Field(default_factory=list)
    workouts: List[str] = Field(default_factory=list)
    diets: List[str] = Field(default_factory=list)


class DiseaseData(BaseModel):
    """A disease or condition described by its symptoms and care options."""
    name: str = ""
    symptoms: List[str] = Field(default_factory=list)
    common_causes: List[str] = Field(default_factory=list)
    treatments: List[str] = Field(default_factory=list)
    prevention: List[str] = Field(default_factory=list)
    urgency_level: Level = "low"
    precautions: List[str] = Field(default_factory=list)
    recommended_workouts: List[str] = Field(default_factory=list)
    dietary_recommendations: List[str] = Field(default_factory=list)
    description: str = ""


class PrecautionData(BaseModel):
    condition: str = ""
    precautions: List[str] = Field(default_factory=list)
    severity: Level = "low"
    category: PrecautionCategory = "general"


class WorkoutData(BaseModel):
    condition: str = ""
    exercises: List[str] = Field(default_factory=list)
    duration: str = "30 minutes"
    frequency: str = "3 times per week"
    intensity: Level = "moderate"
    category: WorkoutCategory = "cardio"


class DietData(BaseModel):
    condition: str = ""
    foods: List[str] = Field(default_factory=list)
    avoid_foods: List[str] = Field(default_factory=list)
    category: DietCategory = "nutrition"
    instructions: List[str] = Field(default_factory=list)


class DatasetStatistics(BaseModel):
    """Record counts for the currently loaded dataset."""
    total_symptoms: int = 0
    total_diseases: int = 0
    total_precautions: int = 0
    total_workouts: int = 0
    total_diets: int = 0
    high_urgency_symptoms: int = 0
    emergency_symptoms: int = 0


class HealthSolution(BaseModel):
    """Combined advice assembled from every dataset that matched a query."""
    analysis: str
    precautions: List[str] = Field(default_factory=list)
    workouts: List[str] = Field(default_factory=list)
    diets: List[str] = Field(default_factory=list)
    urgency: Level = "low"
