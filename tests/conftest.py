"""
Shared test configuration.

Settings are read when lifesave.config is imported, so the environment is
prepared here before any test module imports the package.
"""

import os

os.environ.setdefault("PREDICTION_DELAY", "0")
os.environ.setdefault("PREDICTION_JITTER", "0")
os.environ.setdefault("INTERACTION_LOGGING", "false")
os.environ.setdefault("DB_URL", "sqlite://")

import pytest

from lifesave.dataset_processor import DatasetProcessor


SAMPLE_DATASET = {
    "symptoms": [
        {
            "symptom": "headache",
            "description": "Pain in the head or neck area",
            "severity": "mild",
            "urgency": "low",
            "conditions": ["tension headache", "migraine", "dehydration"],
            "recommendations": ["Rest in a dark room", "Drink water"],
            "precautions": ["Limit screen time", "Stay hydrated"],
            "workouts": ["Neck stretches"],
            "diets": ["Magnesium-rich foods"]
        },
        {
            "symptom": "fever",
            "description": "Raised body temperature",
            "severity": "moderate",
            "urgency": "moderate",
            "conditions": ["influenza", "viral infection"],
            "recommendations": ["Monitor your temperature"],
            "precautions": ["Rest", "Stay hydrated"],
            "diets": ["Clear broths"]
        },
        {
            "symptom": "shortness of breath",
            "description": "Difficulty getting enough air",
            "severity": "severe",
            "urgency": "emergency",
            "conditions": ["asthma attack", "pneumonia", "heart failure"],
            "recommendations": ["Seek emergency care right away"],
            "emergency_indicators": ["blue lips"]
        }
    ],
    "diseases": [
        {
            "disease": "Influenza",
            "description": "A contagious respiratory illness.",
            "symptoms": ["high temperature", "body aches", "chills"],
            "treatments": ["Antiviral medication", "Rest", "Fluids"],
            "urgency": "moderate",
            "precautions": ["Stay home", "Rest"],
            "workouts": ["Complete rest"],
            "diets": ["Electrolyte drinks"]
        },
        {
            "disease": "Hypertension",
            "description": "Persistently elevated blood pressure.",
            "symptoms": ["blurred vision", "nosebleeds"],
            "treatments": ["ACE inhibitors"],
            "recommended_workouts": ["Brisk walking"],
            "dietary_recommendations": ["DASH diet"]
        }
    ],
    "precautions": [
        {
            "condition": "migraine",
            "precautions": ["Keep a headache diary", "Maintain regular sleep", "Avoid bright light", "Limit caffeine"],
            "severity": "moderate",
            "category": "lifestyle"
        }
    ],
    "workouts": [
        {
            "condition": "back pain",
            "exercises": ["Cat-cow stretch", "Bird dog", "Pelvic tilts", "Walking"],
            "duration": "15 minutes",
            "frequency": "daily",
            "intensity": "low",
            "category": "stretching"
        }
    ],
    "diets": [
        {
            "condition": "diabetes",
            "foods": ["Whole grains", "Leafy greens", "Lean protein", "Legumes", "Nuts"],
            "avoid_foods": ["Sugary drinks", "White bread", "Pastries", "Candy"],
            "category": "therapeutic",
            "instructions": ["Spread carbohydrates through the day", "Check labels"]
        }
    ]
}


def _build_processor(data=None) -> DatasetProcessor:
    """Return a fresh processor loaded with ``data`` (the sample by default)."""
    data = SAMPLE_DATASET if data is None else data
    processor = DatasetProcessor()
    processor.load_symptoms_dataset(data.get("symptoms", []))
    processor.load_diseases_dataset(data.get("diseases", []))
    processor.load_precautions_dataset(data.get("precautions", []))
    processor.load_workouts_dataset(data.get("workouts", []))
    processor.load_diets_dataset(data.get("diets", []))
    return processor


@pytest.fixture
def sample_dataset():
    return SAMPLE_DATASET


@pytest.fixture
def processor():
    return _build_processor()


@pytest.fixture
def empty_processor():
    return DatasetProcessor()


@pytest.fixture
def make_processor():
    """Factory for processors loaded with custom data."""
    return _build_processor
