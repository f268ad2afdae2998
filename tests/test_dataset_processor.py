"""
Unit tests for the dataset matcher.

Covers raw row loading and normalization, substring matching in each
dataset, formatted dataset responses and merged health solutions.
"""

import pytest

from lifesave.dataset_processor import (
    SYMPTOM_CHECKER_HINT,
    DatasetProcessor,
    normalize_category,
    normalize_diet_category,
    normalize_intensity,
    normalize_precaution_severity,
    normalize_severity,
    normalize_urgency,
    normalize_workout_category,
    parse_array,
)


class TestParseArray:
    """Test cases for list parsing of raw dataset fields."""

    def test_delimited_string(self):
        assert parse_array("eczema; dermatitis | allergy, hives") == [
            "eczema", "dermatitis", "allergy", "hives"
        ]

    def test_list_is_trimmed_and_blank_items_dropped(self):
        assert parse_array([" rest ", "", "fluids", "   "]) == ["rest", "fluids"]

    def test_non_string_values_become_empty(self):
        assert parse_array(None) == []
        assert parse_array(42) == []
        assert parse_array({"a": 1}) == []

    def test_empty_string(self):
        assert parse_array("") == []
        assert parse_array(" ; | , ") == []


class TestNormalizers:
    """Test cases for the category and level normalizers."""

    @pytest.mark.parametrize("raw,expected", [
        ("Severe", "severe"), ("high", "severe"), ("MODERATE", "moderate"),
        ("medium", "moderate"), ("mild", "mild"), ("", "mild"), (None, "mild"),
    ])
    def test_severity(self, raw, expected):
        assert normalize_severity(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("severe", "high"), ("High", "high"), ("medium", "moderate"), ("low", "low"), (None, "low"),
    ])
    def test_precaution_severity(self, raw, expected):
        assert normalize_precaution_severity(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("high", "high"), ("Urgent", "high"), ("emergency", "high"),
        ("moderate", "moderate"), ("Medium", "moderate"), ("low", "low"), ("whenever", "low"),
    ])
    def test_urgency(self, raw, expected):
        assert normalize_urgency(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("emergency", "emergency"), ("urgent care", "emergency"), ("Lifestyle", "lifestyle"),
        ("daily", "lifestyle"), ("other", "general"),
    ])
    def test_precaution_category(self, raw, expected):
        assert normalize_category(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("vigorous", "high"), ("intense", "high"), ("moderate", "moderate"), ("gentle", "low"),
    ])
    def test_intensity(self, raw, expected):
        assert normalize_intensity(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("weight training", "strength"), ("resistance", "strength"),
        ("stretching", "flexibility"), ("yoga", "flexibility"),
        ("rehabilitation", "recovery"), ("rest day", "recovery"),
        ("running", "cardio"),
    ])
    def test_workout_category(self, raw, expected):
        assert normalize_workout_category(raw) == expected

    @pytest.mark.parametrize("raw,expected", [
        ("treatment", "therapeutic"), ("medical", "therapeutic"),
        ("prevention", "preventive"), ("wellness", "preventive"), ("general", "nutrition"),
    ])
    def test_diet_category(self, raw, expected):
        assert normalize_diet_category(raw) == expected


class TestLoading:
    """Test cases for loading raw rows into records."""

    def test_sample_dataset_loaded(self, processor):
        stats = processor.get_statistics()
        assert stats.total_symptoms == 3
        assert stats.total_diseases == 2
        assert stats.total_precautions == 1
        assert stats.total_workouts == 1
        assert stats.total_diets == 1

    def test_capitalized_keys_and_delimited_values(self, empty_processor):
        empty_processor.load_symptoms_dataset([{
            "Symptom": "rash",
            "Description": "Itchy skin",
            "Conditions": "eczema; dermatitis",
            "Recommendations": "Keep dry | Avoid scratching",
            "EmergencyIndicators": "swelling of the face",
        }])

        symptom = empty_processor.symptoms_data[0]
        assert symptom.symptom == "rash"
        assert symptom.description == "Itchy skin"
        assert symptom.conditions == ["eczema", "dermatitis"]
        assert symptom.recommendations == ["Keep dry", "Avoid scratching"]
        assert symptom.emergency_indicators == ["swelling of the face"]
        assert symptom.severity == "mild"
        assert symptom.urgency == "low"
        assert symptom.precautions == []

    def test_disease_alternative_keys(self, empty_processor):
        empty_processor.load_diseases_dataset([{
            "name": "Hypertension",
            "Symptoms": ["headache"],
            "causes": "salt, stress",
            "recommended_workouts": ["Walking"],
            "dietary_recommendations": ["DASH diet"],
        }])

        disease = empty_processor.diseases_data[0]
        assert disease.name == "Hypertension"
        assert disease.symptoms == ["headache"]
        assert disease.common_causes == ["salt", "stress"]
        assert disease.recommended_workouts == ["Walking"]
        assert disease.dietary_recommendations == ["DASH diet"]
        assert disease.urgency_level == "low"

    def test_workout_defaults(self, empty_processor):
        empty_processor.load_workouts_dataset([{"condition": "obesity", "exercises": "walking"}])

        workout = empty_processor.workouts_data[0]
        assert workout.duration == "30 minutes"
        assert workout.frequency == "3 times per week"
        assert workout.intensity == "moderate"
        assert workout.category == "cardio"

    def test_diet_alternative_keys(self, empty_processor):
        empty_processor.load_diets_dataset([{
            "Condition": "gastroenteritis",
            "recommended_foods": "Bananas; Rice",
            "foods_to_avoid": "Dairy",
            "category": "treatment",
        }])

        diet = empty_processor.diets_data[0]
        assert diet.condition == "gastroenteritis"
        assert diet.foods == ["Bananas", "Rice"]
        assert diet.avoid_foods == ["Dairy"]
        assert diet.category == "therapeutic"
        assert diet.instructions == []

    def test_precaution_defaults(self, empty_processor):
        empty_processor.load_precautions_dataset([{"condition": "flu", "precautions": "rest"}])

        precaution = empty_processor.precautions_data[0]
        assert precaution.severity == "low"
        assert precaution.category == "general"

    def test_invalid_rows_keep_previous_data(self, processor):
        processor.load_symptoms_dataset(["not a mapping"])
        processor.load_diseases_dataset(None)

        assert len(processor.symptoms_data) == 3
        assert len(processor.diseases_data) == 2

    def test_clear(self, processor):
        processor.clear()
        assert processor.get_statistics().total_symptoms == 0
        assert processor.get_statistics().total_diets == 0


class TestMatching:
    """Test cases for the substring matchers."""

    def test_symptom_named_in_input(self, processor):
        matches = processor.find_matching_symptoms("I have a bad HEADACHE today")
        assert [m.symptom for m in matches] == ["headache"]

    def test_symptom_matched_by_condition(self, processor):
        matches = processor.find_matching_symptoms("could this be a migraine?")
        assert [m.symptom for m in matches] == ["headache"]

    def test_symptom_matched_by_description(self, processor):
        matches = processor.find_matching_symptoms("body temperature")
        assert [m.symptom for m in matches] == ["fever"]

    def test_symptoms_keep_source_order(self, processor):
        matches = processor.find_matching_symptoms("fever and headache")
        assert [m.symptom for m in matches] == ["headache", "fever"]

    def test_empty_input_matches_nothing(self, processor):
        assert processor.find_matching_symptoms("") == []
        assert processor.find_matching_symptoms("   ") == []
        assert processor.find_matching_precautions("") == []
        assert processor.find_matching_workouts("") == []
        assert processor.find_matching_diets("") == []
        assert processor.find_matching_diseases([""]) == []

    def test_empty_key_field_never_matches(self, make_processor):
        processor = make_processor({
            "symptoms": [{"symptom": "", "description": "unknown"}],
            "precautions": [{"condition": "", "precautions": []}],
        })
        assert processor.find_matching_symptoms("anything at all") == []
        assert processor.find_matching_precautions("anything at all") == []

    def test_diseases_match_in_both_directions(self, processor):
        assert [d.name for d in processor.find_matching_diseases(["chills"])] == ["Influenza"]
        assert [d.name for d in processor.find_matching_diseases(["vision"])] == ["Hypertension"]
        assert [d.name for d in processor.find_matching_diseases(["I get chills at night"])] == ["Influenza"]

    def test_precautions_workouts_diets(self, processor):
        assert [p.condition for p in processor.find_matching_precautions("my migraine")] == ["migraine"]
        assert [w.condition for w in processor.find_matching_workouts("I like pelvic tilts")] == ["back pain"]
        assert [d.condition for d in processor.find_matching_diets("are legumes good?")] == ["diabetes"]


class TestDatasetResponse:
    """Test cases for generate_dataset_response."""

    def test_no_match_returns_none(self, processor):
        assert processor.generate_dataset_response("tell me a joke") is None

    def test_symptom_analysis_section(self, processor):
        response = processor.generate_dataset_response("I have a headache")

        assert response.startswith("## 🩺 Symptom Analysis")
        assert "**Headache**: Pain in the head or neck area" in response
        assert "This could indicate: tension headache, migraine, dehydration." in response
        assert "Recommendations: Rest in a dark room" in response
        assert "Related Conditions" not in response
        assert response.endswith(SYMPTOM_CHECKER_HINT)

    def test_high_urgency_short_circuits(self, processor):
        response = processor.generate_dataset_response("shortness of breath since morning")

        assert response == (
            '🚨 URGENT: The symptom "shortness of breath" may indicate serious conditions '
            'including asthma attack or pneumonia. Seek emergency care right away'
        )

    def test_high_urgency_without_recommendation(self, make_processor):
        processor = make_processor({"symptoms": [{
            "symptom": "seizure", "urgency": "high", "conditions": ["epilepsy"]
        }]})
        response = processor.generate_dataset_response("a seizure")
        assert response.endswith("Seek immediate medical attention.")

    def test_related_conditions_section(self, processor):
        response = processor.generate_dataset_response("I have chills")

        assert "## 🏥 Related Conditions" in response
        assert "**Influenza**: A contagious respiratory illness." in response
        assert "- Symptoms: high temperature, body aches, chills" in response
        assert "- Treatments: Antiviral medication, Rest" in response
        assert "Fluids" not in response

    def test_precautions_limited_to_three(self, processor):
        response = processor.generate_dataset_response("how to manage my migraine")

        assert "## ⚠️ Precautions" in response
        assert "**For migraine**:" in response
        assert "- Avoid bright light" in response
        assert "Limit caffeine" not in response

    def test_workout_section(self, processor):
        response = processor.generate_dataset_response("exercises for back pain")

        assert "## 💪 Recommended Exercises" in response
        assert "**For back pain** (low intensity):" in response
        assert "- Pelvic tilts" in response
        assert "- Walking" not in response
        assert "Duration: 15 minutes | Frequency: daily" in response

    def test_diet_section(self, processor):
        response = processor.generate_dataset_response("diet for diabetes")

        assert "## 🥗 Dietary Recommendations" in response
        assert "- Recommended: Whole grains, Leafy greens, Lean protein, Legumes" in response
        assert "Nuts" not in response
        assert "- Avoid: Sugary drinks, White bread, Pastries" in response
        assert "Candy" not in response
        assert "- Instructions: Spread carbohydrates through the day" in response

    def test_at_most_two_records_per_section(self, make_processor):
        processor = make_processor({"symptoms": [
            {"symptom": "cough", "description": "a"},
            {"symptom": "dry cough", "description": "b"},
            {"symptom": "chronic dry cough", "description": "c"},
        ]})
        response = processor.generate_dataset_response("chronic dry cough")

        assert "**Cough**" in response
        assert "**Dry cough**" in response
        assert "**Chronic dry cough**" not in response


class TestHealthSolution:
    """Test cases for generate_health_solution."""

    def test_requires_symptom_or_disease(self, processor):
        assert processor.generate_health_solution("diet for diabetes") is None

    def test_merges_symptom_advice(self, processor):
        solution = processor.generate_health_solution("I have a headache and fever")

        assert solution.analysis == (
            "Based on your symptoms, this could be related to: tension headache or migraine"
        )
        assert solution.urgency == "moderate"
        assert solution.precautions == ["Limit screen time", "Stay hydrated", "Rest"]
        assert solution.workouts == ["Neck stretches"]
        assert solution.diets == ["Magnesium-rich foods", "Clear broths"]

    def test_disease_only_analysis(self, processor):
        solution = processor.generate_health_solution("chills")

        assert solution.analysis == (
            "Based on the information provided, this appears to be related to Influenza"
        )
        assert solution.urgency == "low"
        assert solution.precautions == ["Stay home", "Rest"]
        assert solution.workouts == ["Complete rest"]
        assert solution.diets == ["Electrolyte drinks"]

    def test_high_urgency(self, processor):
        solution = processor.generate_health_solution("shortness of breath")
        assert solution.urgency == "high"

    def test_lists_capped_at_five(self, make_processor):
        processor = make_processor({"symptoms": [{
            "symptom": "insomnia",
            "precautions": ["a", "b", "c", "d", "e", "f", "g"],
        }]})
        solution = processor.generate_health_solution("insomnia")
        assert solution.precautions == ["a", "b", "c", "d", "e"]


class TestStatistics:

    def test_counts(self, processor):
        stats = processor.get_statistics()
        assert stats.high_urgency_symptoms == 1
        assert stats.emergency_symptoms == 1

    def test_empty(self):
        stats = DatasetProcessor().get_statistics()
        assert stats.model_dump() == {
            "total_symptoms": 0,
            "total_diseases": 0,
            "total_precautions": 0,
            "total_workouts": 0,
            "total_diets": 0,
            "high_urgency_symptoms": 0,
            "emergency_symptoms": 0,
        }
