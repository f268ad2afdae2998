"""
Unit tests for Pydantic models and validation schemas.
"""

import pytest
from pydantic import ValidationError

from lifesave.models import (
    ChatIn,
    DatasetLoadIn,
    PatientProfile,
    PredictionResult,
    SelectedSymptom,
    SymptomCheckOut,
    SymptomInput,
    SymptomListIn,
)


class TestChatInModel:
    """Test cases for ChatIn model validation."""

    def test_message_is_stripped(self):
        assert ChatIn(message="  I have a headache  ").message == "I have a headache"

    @pytest.mark.parametrize("message", ["", "   ", "\n\t"])
    def test_empty_message_rejected(self, message):
        with pytest.raises(ValidationError):
            ChatIn(message=message)

    def test_message_length_limit(self):
        ChatIn(message="a" * 1000)
        with pytest.raises(ValidationError):
            ChatIn(message="a" * 1001)

    @pytest.mark.parametrize("message", [
        "<script>alert('x')</script> headache",
        "javascript:alert(1)",
        "<img src=x onerror=alert(1)>",
    ])
    def test_suspicious_content_rejected(self, message):
        with pytest.raises(ValidationError) as exc_info:
            ChatIn(message=message)
        assert "invalid content" in str(exc_info.value)

    def test_missing_message(self):
        with pytest.raises(ValidationError):
            ChatIn()


class TestSymptomInputModel:

    def test_defaults(self):
        data = SymptomInput(symptoms=" cough ")
        assert data.symptoms == "cough"
        assert data.language == "en"

    def test_blank_symptoms_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            SymptomInput(symptoms="   ")
        assert "Symptoms cannot be empty" in str(exc_info.value)


class TestSymptomListInModel:

    def test_blank_entries_dropped(self):
        assert SymptomListIn(symptoms=["Fever", " ", " Cough "]).symptoms == ["Fever", "Cough"]

    def test_all_blank_rejected(self):
        with pytest.raises(ValidationError):
            SymptomListIn(symptoms=["", "  "])

    def test_empty_list_rejected(self):
        with pytest.raises(ValidationError):
            SymptomListIn(symptoms=[])


class TestResultModels:

    def test_prediction_confidence_bounds(self):
        with pytest.raises(ValidationError):
            PredictionResult(disease="x", confidence=101, description="y")

    def test_symptom_check_defaults(self):
        result = SymptomCheckOut()
        assert result.emergency is False
        assert result.message is None
        assert result.prediction is None

    def test_patient_profile_optional_fields(self):
        profile = PatientProfile()
        assert profile.age is None
        assert profile.conditions == []

        with pytest.raises(ValidationError):
            PatientProfile(age=-1)


class TestSmallModels:

    def test_dataset_source_stripped(self):
        assert DatasetLoadIn(source=" data.json ").source == "data.json"

    def test_selected_symptom_defaults(self):
        symptom = SelectedSymptom(name="Rash")
        assert symptom.severity == "Mild"
        assert symptom.duration == "1 day"
        assert symptom.selected is True

    def test_selected_symptom_severity_labels(self):
        with pytest.raises(ValidationError):
            SelectedSymptom(name="Rash", severity="mild")
