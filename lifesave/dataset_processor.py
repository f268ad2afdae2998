"""
Dataset matcher for the LifeSave health assistant.

Holds the loaded symptom, disease, precaution, workout and diet records in
memory and answers free-text queries with case-insensitive substring checks.
Matches keep the order of the source data; there is no relevance ranking.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Optional

from .records import (
    DatasetStatistics,
    DietData,
    DiseaseData,
    HealthSolution,
    PrecautionData,
    SymptomData,
    WorkoutData,
)

logger = logging.getLogger(__name__)

SYMPTOM_CHECKER_HINT = (
    "💡 Use our Symptom Checker for more detailed analysis and personalized recommendations."
)

# Display limits for formatted responses
MAX_RECORDS_PER_SECTION = 2
MAX_SOLUTION_ITEMS = 5

_SEPARATORS = re.compile(r"[,;|]")


def _pick(item: Dict[str, Any], *keys: str, default: Any = "") -> Any:
    """Return the first non-empty value found under any of ``keys``."""
    for key in keys:
        value = item.get(key)
        if value:
            return value
    return default


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def parse_array(value: Any) -> List[str]:
    """
    Turn a list or a delimited string into a list of trimmed strings.

    Strings may be separated by commas, semicolons or pipes. Empty items are
    dropped, and anything that is neither a list nor a string becomes ``[]``.
    """
    if isinstance(value, (list, tuple)):
        items = [_text(item).strip() for item in value]
        return [item for item in items if item]
    if not isinstance(value, str):
        return []
    return [item.strip() for item in _SEPARATORS.split(value) if item.strip()]


def normalize_severity(value: Any) -> str:
    lower = _text(value).lower()
    if "severe" in lower or "high" in lower:
        return "severe"
    if "moderate" in lower or "medium" in lower:
        return "moderate"
    return "mild"


def normalize_precaution_severity(value: Any) -> str:
    lower = _text(value).lower()
    if "severe" in lower or "high" in lower:
        return "high"
    if "moderate" in lower or "medium" in lower:
        return "moderate"
    return "low"


def normalize_urgency(value: Any) -> str:
    lower = _text(value).lower()
    if "high" in lower or "urgent" in lower or "emergency" in lower:
        return "high"
    if "moderate" in lower or "medium" in lower:
        return "moderate"
    return "low"


def normalize_category(value: Any) -> str:
    lower = _text(value).lower()
    if "emergency" in lower or "urgent" in lower:
        return "emergency"
    if "lifestyle" in lower or "daily" in lower:
        return "lifestyle"
    return "general"


def normalize_intensity(value: Any) -> str:
    lower = _text(value).lower()
    if "high" in lower or "intense" in lower or "vigorous" in lower:
        return "high"
    if "moderate" in lower or "medium" in lower:
        return "moderate"
    return "low"


def normalize_workout_category(value: Any) -> str:
    lower = _text(value).lower()
    if any(word in lower for word in ["strength", "weight", "resistance"]):
        return "strength"
    if any(word in lower for word in ["flexibility", "stretch", "yoga"]):
        return "flexibility"
    if any(word in lower for word in ["recovery", "rest", "rehabilitation"]):
        return "recovery"
    return "cardio"


def normalize_diet_category(value: Any) -> str:
    lower = _text(value).lower()
    if any(word in lower for word in ["therapeutic", "treatment", "medical"]):
        return "therapeutic"
    if any(word in lower for word in ["preventive", "prevention", "wellness"]):
        return "preventive"
    return "nutrition"


def _unique(items: Iterable[str]) -> List[str]:
    return list(dict.fromkeys(items))


def _contains_any(text: str, needles: Iterable[str]) -> bool:
    return any(needle and needle.lower() in text for needle in needles)


def _capitalize(text: str) -> str:
    return text[:1].upper() + text[1:]


class DatasetProcessor:
    """In-memory store and matcher for the health dataset."""

    def __init__(self):
        self.symptoms_data: List[SymptomData] = []
        self.diseases_data: List[DiseaseData] = []
        self.precautions_data: List[PrecautionData] = []
        self.workouts_data: List[WorkoutData] = []
        self.diets_data: List[DietData] = []

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_symptoms_dataset(self, data: Any) -> None:
        """Replace the symptom records with rows from ``data``."""
        try:
            self.symptoms_data = [
                SymptomData(
                    symptom=_text(_pick(item, "symptom", "Symptom")),
                    description=_text(_pick(item, "description", "Description")),
                    severity=normalize_severity(_pick(item, "severity", "Severity")),
                    urgency=normalize_urgency(_pick(item, "urgency", "Urgency")),
                    conditions=parse_array(_pick(item, "conditions", "Conditions")),
                    recommendations=parse_array(_pick(item, "recommendations", "Recommendations")),
                    emergency_indicators=parse_array(
                        _pick(item, "emergency_indicators", "EmergencyIndicators")
                    ),
                    precautions=parse_array(_pick(item, "precautions", "Precautions")),
                    workouts=parse_array(_pick(item, "workouts", "Workouts")),
                    diets=parse_array(_pick(item, "diets", "Diets")),
                )
                for item in data
            ]
            logger.info("Loaded %d symptoms from dataset", len(self.symptoms_data))
        except Exception as e:
            logger.error("Error loading symptoms dataset: %s", e)

    def load_diseases_dataset(self, data: Any) -> None:
        """Replace the disease records with rows from ``data``."""
        try:
            self.diseases_data = [
                DiseaseData(
                    name=_text(_pick(item, "disease", "Disease", "name")),
                    symptoms=parse_array(_pick(item, "symptoms", "Symptoms")),
                    common_causes=parse_array(_pick(item, "causes", "Causes")),
                    treatments=parse_array(_pick(item, "treatments", "Treatments")),
                    prevention=parse_array(_pick(item, "prevention", "Prevention")),
                    urgency_level=normalize_urgency(
                        _pick(item, "urgency", "Urgency", default="low")
                    ),
                    precautions=parse_array(_pick(item, "precautions", "Precautions")),
                    recommended_workouts=parse_array(
                        _pick(item, "workouts", "Workouts", "recommended_workouts")
                    ),
                    dietary_recommendations=parse_array(
                        _pick(item, "diets", "Diets", "dietary_recommendations")
                    ),
                    description=_text(_pick(item, "description", "Description")),
                )
                for item in data
            ]
            logger.info("Loaded %d diseases from dataset", len(self.diseases_data))
        except Exception as e:
            logger.error("Error loading diseases dataset: %s", e)

    def load_precautions_dataset(self, data: Any) -> None:
        try:
            self.precautions_data = [
                PrecautionData(
                    condition=_text(_pick(item, "condition", "Condition")),
                    precautions=parse_array(_pick(item, "precautions", "Precautions")),
                    severity=normalize_precaution_severity(
                        _pick(item, "severity", "Severity", default="low")
                    ),
                    category=normalize_category(
                        _pick(item, "category", "Category", default="general")
                    ),
                )
                for item in data
            ]
            logger.info("Loaded %d precautions from dataset", len(self.precautions_data))
        except Exception as e:
            logger.error("Error loading precautions dataset: %s", e)

    def load_workouts_dataset(self, data: Any) -> None:
        try:
            self.workouts_data = [
                WorkoutData(
                    condition=_text(_pick(item, "condition", "Condition")),
                    exercises=parse_array(_pick(item, "exercises", "Exercises")),
                    duration=_text(_pick(item, "duration", "Duration", default="30 minutes")),
                    frequency=_text(
                        _pick(item, "frequency", "Frequency", default="3 times per week")
                    ),
                    intensity=normalize_intensity(
                        _pick(item, "intensity", "Intensity", default="moderate")
                    ),
                    category=normalize_workout_category(
                        _pick(item, "category", "Category", default="cardio")
                    ),
                )
                for item in data
            ]
            logger.info("Loaded %d workout routines from dataset", len(self.workouts_data))
        except Exception as e:
            logger.error("Error loading workouts dataset: %s", e)

    def load_diets_dataset(self, data: Any) -> None:
        try:
            self.diets_data = [
                DietData(
                    condition=_text(_pick(item, "condition", "Condition")),
                    foods=parse_array(_pick(item, "foods", "Foods", "recommended_foods")),
                    avoid_foods=parse_array(
                        _pick(item, "avoid_foods", "AvoidFoods", "foods_to_avoid")
                    ),
                    category=normalize_diet_category(
                        _pick(item, "category", "Category", default="nutrition")
                    ),
                    instructions=parse_array(_pick(item, "instructions", "Instructions")),
                )
                for item in data
            ]
            logger.info("Loaded %d dietary recommendations from dataset", len(self.diets_data))
        except Exception as e:
            logger.error("Error loading diets dataset: %s", e)

    def clear(self) -> None:
        """Drop every loaded record."""
        self.symptoms_data = []
        self.diseases_data = []
        self.precautions_data = []
        self.workouts_data = []
        self.diets_data = []

    # ------------------------------------------------------------------
    # Matching
    # ------------------------------------------------------------------

    def find_matching_symptoms(self, user_input: str) -> List[SymptomData]:
        """Find symptoms named in, or described by, the user's input."""
        lower_input = user_input.lower().strip()
        if not lower_input:
            return []
        return [
            symptom for symptom in self.symptoms_data
            if (symptom.symptom and symptom.symptom.lower() in lower_input)
            or lower_input in symptom.description.lower()
            or _contains_any(lower_input, symptom.conditions)
        ]

    def find_matching_precautions(self, user_input: str) -> List[PrecautionData]:
        lower_input = user_input.lower().strip()
        if not lower_input:
            return []
        return [
            precaution for precaution in self.precautions_data
            if (precaution.condition and precaution.condition.lower() in lower_input)
            or _contains_any(lower_input, precaution.precautions)
        ]

    def find_matching_workouts(self, user_input: str) -> List[WorkoutData]:
        lower_input = user_input.lower().strip()
        if not lower_input:
            return []
        return [
            workout for workout in self.workouts_data
            if (workout.condition and workout.condition.lower() in lower_input)
            or _contains_any(lower_input, workout.exercises)
        ]

    def find_matching_diets(self, user_input: str) -> List[DietData]:
        lower_input = user_input.lower().strip()
        if not lower_input:
            return []
        return [
            diet for diet in self.diets_data
            if (diet.condition and diet.condition.lower() in lower_input)
            or _contains_any(lower_input, diet.foods)
        ]

    def find_matching_diseases(self, symptoms: List[str]) -> List[DiseaseData]:
        """
        Find diseases sharing a symptom with the user's list.

        A disease symptom matches when either string contains the other.
        """
        lower_symptoms = [s.lower().strip() for s in symptoms if s and s.strip()]
        if not lower_symptoms:
            return []
        matches = []
        for disease in self.diseases_data:
            for disease_symptom in disease.symptoms:
                known = disease_symptom.lower()
                if any(known in user or user in known for user in lower_symptoms):
                    matches.append(disease)
                    break
        return matches

    # ------------------------------------------------------------------
    # Responses
    # ------------------------------------------------------------------

    def generate_dataset_response(self, user_input: str) -> Optional[str]:
        """
        Build a Markdown answer from every dataset that matches the input.

        Returns None when nothing matches so callers can fall back to the
        built-in knowledge base. A high-urgency symptom short-circuits to a
        single urgent warning.
        """
        matching_symptoms = self.find_matching_symptoms(user_input)
        matching_diseases = self.find_matching_diseases([user_input])
        matching_precautions = self.find_matching_precautions(user_input)
        matching_workouts = self.find_matching_workouts(user_input)
        matching_diets = self.find_matching_diets(user_input)

        if not (matching_symptoms or matching_diseases or matching_precautions
                or matching_workouts or matching_diets):
            return None

        high_urgency = [s for s in matching_symptoms if s.urgency == "high"]
        if high_urgency:
            emergency = high_urgency[0]
            advice = (
                emergency.recommendations[0]
                if emergency.recommendations else "Seek immediate medical attention."
            )
            return (
                f'🚨 URGENT: The symptom "{emergency.symptom}" may indicate serious conditions '
                f'including {" or ".join(emergency.conditions[:2])}. {advice}'
            )

        response = ""

        if matching_symptoms:
            response += "## 🩺 Symptom Analysis\n"
            for symptom in matching_symptoms[:MAX_RECORDS_PER_SECTION]:
                conditions_text = (
                    f"This could indicate: {', '.join(symptom.conditions[:3])}."
                    if symptom.conditions else ""
                )
                recommendations_text = (
                    f"Recommendations: {symptom.recommendations[0]}"
                    if symptom.recommendations else ""
                )
                response += (
                    f"**{_capitalize(symptom.symptom)}**: {symptom.description} "
                    f"{conditions_text} {recommendations_text}\n\n"
                )

        if matching_diseases:
            response += "## 🏥 Related Conditions\n"
            for disease in matching_diseases[:MAX_RECORDS_PER_SECTION]:
                response += f"**{disease.name}**: {disease.description}\n"
                if disease.symptoms:
                    response += f"- Symptoms: {', '.join(disease.symptoms[:3])}\n"
                if disease.treatments:
                    response += f"- Treatments: {', '.join(disease.treatments[:2])}\n"
                response += "\n"

        if matching_precautions:
            response += "## ⚠️ Precautions\n"
            for precaution in matching_precautions[:MAX_RECORDS_PER_SECTION]:
                response += f"**For {precaution.condition}**:\n"
                for item in precaution.precautions[:3]:
                    response += f"- {item}\n"
                response += "\n"

        if matching_workouts:
            response += "## 💪 Recommended Exercises\n"
            for workout in matching_workouts[:MAX_RECORDS_PER_SECTION]:
                response += f"**For {workout.condition}** ({workout.intensity} intensity):\n"
                for exercise in workout.exercises[:3]:
                    response += f"- {exercise}\n"
                response += f"Duration: {workout.duration} | Frequency: {workout.frequency}\n\n"

        if matching_diets:
            response += "## 🥗 Dietary Recommendations\n"
            for diet in matching_diets[:MAX_RECORDS_PER_SECTION]:
                response += f"**For {diet.condition}**:\n"
                if diet.foods:
                    response += f"- Recommended: {', '.join(diet.foods[:4])}\n"
                if diet.avoid_foods:
                    response += f"- Avoid: {', '.join(diet.avoid_foods[:3])}\n"
                if diet.instructions:
                    response += f"- Instructions: {diet.instructions[0]}\n"
                response += "\n"

        response += "\n" + SYMPTOM_CHECKER_HINT
        return response.strip()

    def generate_health_solution(self, user_input: str) -> Optional[HealthSolution]:
        """
        Merge precautions, workouts and diets from every matching record.

        Only produced when a symptom or disease matches. Each list keeps
        first-seen order, drops duplicates and is capped at five items.
        """
        matching_symptoms = self.find_matching_symptoms(user_input)
        matching_diseases = self.find_matching_diseases([user_input])

        if not matching_symptoms and not matching_diseases:
            return None

        matching_precautions = self.find_matching_precautions(user_input)
        matching_workouts = self.find_matching_workouts(user_input)
        matching_diets = self.find_matching_diets(user_input)

        if any(s.urgency == "high" for s in matching_symptoms):
            urgency = "high"
        elif any(s.urgency == "moderate" for s in matching_symptoms):
            urgency = "moderate"
        else:
            urgency = "low"

        if matching_symptoms:
            analysis = (
                "Based on your symptoms, this could be related to: "
                + " or ".join(matching_symptoms[0].conditions[:2])
            )
        else:
            analysis = (
                "Based on the information provided, this appears to be related to "
                + matching_diseases[0].name
            )

        precautions = _unique(
            [p for s in matching_symptoms for p in s.precautions]
            + [p for m in matching_precautions for p in m.precautions]
            + [p for d in matching_diseases for p in d.precautions]
        )
        workouts = _unique(
            [w for s in matching_symptoms for w in s.workouts]
            + [e for w in matching_workouts for e in w.exercises]
            + [w for d in matching_diseases for w in d.recommended_workouts]
        )
        diets = _unique(
            [d for s in matching_symptoms for d in s.diets]
            + [f for d in matching_diets for f in d.foods]
            + [r for d in matching_diseases for r in d.dietary_recommendations]
        )

        return HealthSolution(
            analysis=analysis,
            precautions=precautions[:MAX_SOLUTION_ITEMS],
            workouts=workouts[:MAX_SOLUTION_ITEMS],
            diets=diets[:MAX_SOLUTION_ITEMS],
            urgency=urgency,
        )

    def get_statistics(self) -> DatasetStatistics:
        return DatasetStatistics(
            total_symptoms=len(self.symptoms_data),
            total_diseases=len(self.diseases_data),
            total_precautions=len(self.precautions_data),
            total_workouts=len(self.workouts_data),
            total_diets=len(self.diets_data),
            high_urgency_symptoms=sum(1 for s in self.symptoms_data if s.urgency == "high"),
            emergency_symptoms=sum(1 for s in self.symptoms_data if s.emergency_indicators),
        )


# Shared instance used by the loader, chatbot and API
dataset_processor = DatasetProcessor()
