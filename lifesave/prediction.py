"""
Symptom checker prediction service.

Scores a free-text symptom description against keyword patterns for a small
set of common conditions and returns the best match from a static database.
Latency is simulated so clients can show a loading state.
"""

import asyncio
import logging
import random
from typing import Dict, List, Optional

from . import config
from .models import (
    PatientProfile,
    PersonalizedRecommendations,
    PredictionResult,
    SymptomCheckOut,
    SymptomInput,
)

logger = logging.getLogger(__name__)

DEFAULT_CONDITION = "common_cold"

MIN_CONFIDENCE = 60
MAX_CONFIDENCE = 95
CONFIDENCE_PER_KEYWORD = 5

EMERGENCY_MESSAGE = (
    "Your symptoms may require immediate medical attention. "
    "Please call emergency services or visit the nearest emergency room."
)

EMERGENCY_KEYWORDS = [
    "chest pain", "difficulty breathing", "severe headache", "high fever",
    "blood", "unconscious", "stroke", "heart attack", "severe abdominal pain"
]

DISEASE_DATABASE: Dict[str, PredictionResult] = {
    "common_cold": PredictionResult(
        disease="Common Cold",
        confidence=85,
        description="A viral infection of the upper respiratory tract that commonly affects the nose and throat. Typically caused by rhinoviruses and is highly contagious.",
        medications=["Acetaminophen (Tylenol)", "Ibuprofen (Advil)", "Decongestants", "Cough suppressants", "Throat lozenges"],
        side_effects=["Drowsiness", "Dry mouth", "Stomach upset", "Dizziness", "Headache"],
        precautions=["Get plenty of rest (8-10 hours)", "Stay hydrated with warm fluids", "Avoid close contact with others", "Wash hands frequently", "Use tissues when sneezing"],
        diet=["Warm fluids (tea, broth)", "Vitamin C rich foods (citrus, berries)", "Honey and ginger tea", "Avoid dairy temporarily", "Chicken soup"],
        exercise=["Light walking only", "Avoid strenuous activities", "Rest until fever subsides", "Gentle breathing exercises", "Avoid gym/public spaces"],
    ),
    "seasonal_allergies": PredictionResult(
        disease="Seasonal Allergies (Allergic Rhinitis)",
        confidence=78,
        description="An immune system response to airborne allergens such as pollen, dust mites, or pet dander. Symptoms typically worsen during specific seasons.",
        medications=["Antihistamines (Claritin, Zyrtec)", "Nasal corticosteroids", "Decongestants", "Eye drops", "Allergy shots (immunotherapy)"],
        side_effects=["Drowsiness", "Dry mouth", "Blurred vision", "Headache", "Nosebleeds (nasal sprays)"],
        precautions=["Avoid known allergens", "Keep windows closed during high pollen", "Use air purifiers", "Monitor pollen counts", "Shower after outdoor activities"],
        diet=["Anti-inflammatory foods", "Local honey", "Quercetin-rich foods (onions, apples)", "Avoid trigger foods", "Reduce dairy during flare-ups"],
        exercise=["Indoor exercises during high pollen", "Swimming in chlorinated pools", "Yoga and stretching", "Avoid outdoor morning runs", "Exercise after rain"],
    ),
    "tension_headache": PredictionResult(
        disease="Tension Headache",
        confidence=72,
        description="The most common type of headache, often caused by stress, poor posture, eye strain, or muscle tension in the head and neck area.",
        medications=["Acetaminophen", "Ibuprofen", "Aspirin", "Topical pain relievers", "Muscle relaxants (if prescribed)"],
        side_effects=["Stomach irritation", "Drowsiness", "Rebound headaches", "Allergic reactions", "Liver damage (with overuse)"],
        precautions=["Manage stress levels", "Maintain regular sleep schedule", "Stay hydrated", "Take breaks from screens", "Correct posture"],
        diet=["Regular balanced meals", "Limit caffeine intake", "Stay well-hydrated", "Avoid alcohol", "Limit processed foods"],
        exercise=["Neck and shoulder stretches", "Gentle yoga", "Regular walking", "Posture exercises", "Relaxation techniques"],
    ),
    "migraine": PredictionResult(
        disease="Migraine Headache",
        confidence=82,
        description="A neurological condition characterized by intense, throbbing headaches often accompanied by nausea, sensitivity to light and sound.",
        medications=["Triptans (Sumatriptan)", "NSAIDs", "Anti-nausea medication", "Preventive medications", "Ergotamines"],
        side_effects=["Nausea", "Dizziness", "Drowsiness", "Muscle weakness", "Chest tightness"],
        precautions=["Identify and avoid triggers", "Maintain regular sleep", "Manage stress", "Stay hydrated", "Keep a headache diary"],
        diet=["Avoid trigger foods (chocolate, aged cheese)", "Regular meal times", "Limit caffeine", "Stay hydrated", "Consider magnesium supplements"],
        exercise=["Gentle aerobic exercise", "Yoga and meditation", "Avoid intense exercise during attacks", "Regular walking", "Relaxation techniques"],
    ),
    "gastroenteritis": PredictionResult(
        disease="Gastroenteritis (Stomach Flu)",
        confidence=80,
        description="Inflammation of the stomach and intestines, usually caused by viral or bacterial infection, resulting in nausea, vomiting, and diarrhea.",
        medications=["Oral rehydration solutions", "Anti-diarrheal medication", "Probiotics", "Electrolyte supplements", "Antiemetics (for nausea)"],
        side_effects=["Constipation (anti-diarrheals)", "Drowsiness", "Dry mouth", "Bloating", "Abdominal cramping"],
        precautions=["Stay hydrated", "Rest and avoid solid foods initially", "Practice good hygiene", "Isolate to prevent spread", "Monitor for dehydration"],
        diet=["Clear fluids initially", "BRAT diet (bananas, rice, applesauce, toast)", "Probiotics", "Avoid dairy temporarily", "Gradual return to normal diet"],
        exercise=["Complete rest initially", "Light walking when feeling better", "Avoid strenuous activity", "Stay near bathroom facilities", "Resume gradually"],
    ),
    "anxiety": PredictionResult(
        disease="Anxiety Disorder",
        confidence=75,
        description="A mental health condition characterized by excessive worry, fear, or nervousness that interferes with daily activities and quality of life.",
        medications=["SSRIs (Sertraline, Escitalopram)", "Benzodiazepines (short-term)", "Beta-blockers", "Buspirone", "Therapy (CBT)"],
        side_effects=["Drowsiness", "Weight changes", "Sexual dysfunction", "Nausea", "Dependency risk (benzodiazepines)"],
        precautions=["Avoid caffeine and alcohol", "Maintain regular sleep", "Practice stress management", "Stay connected with support system", "Monitor mood changes"],
        diet=["Limit caffeine and sugar", "Omega-3 fatty acids", "Complex carbohydrates", "Magnesium-rich foods", "Avoid excessive alcohol"],
        exercise=["Regular aerobic exercise", "Yoga and meditation", "Deep breathing exercises", "Walking in nature", "Progressive muscle relaxation"],
    ),
}

KEYWORD_PATTERNS: Dict[str, List[str]] = {
    "common_cold": ["cold", "runny nose", "congestion", "sore throat", "cough", "sneezing", "fever", "body aches"],
    "seasonal_allergies": ["allergies", "sneezing", "itchy eyes", "watery eyes", "runny nose", "seasonal", "pollen", "hay fever"],
    "tension_headache": ["headache", "head pain", "tension", "stress", "tight", "pressure", "band around head"],
    "migraine": ["migraine", "severe headache", "throbbing", "pulsing", "nausea", "light sensitivity", "sound sensitivity", "aura"],
    "gastroenteritis": ["stomach flu", "nausea", "vomiting", "diarrhea", "stomach pain", "abdominal pain", "food poisoning"],
    "anxiety": ["anxiety", "worried", "nervous", "panic", "racing heart", "sweating", "restless", "fear", "anxious"],
}

GENERAL_RECOMMENDATIONS = PersonalizedRecommendations(
    lifestyle=[
        "Maintain regular sleep schedule (7-9 hours)",
        "Stay hydrated (8 glasses of water daily)",
        "Exercise regularly (30 minutes, 5 days/week)",
        "Practice stress management techniques",
    ],
    nutrition=[
        "Eat a balanced diet rich in fruits and vegetables",
        "Limit processed foods and added sugars",
        "Include omega-3 fatty acids in your diet",
        "Consider vitamin D supplementation",
    ],
    preventive=[
        "Schedule regular check-ups with your healthcare provider",
        "Stay up to date with vaccinations",
        "Monitor blood pressure and cholesterol",
        "Practice good hygiene habits",
    ],
)


def score_conditions(symptoms: str) -> Dict[str, int]:
    """Count how many of each condition's keywords appear in ``symptoms``."""
    text = symptoms.lower()
    return {
        condition: sum(1 for keyword in keywords if keyword in text)
        for condition, keywords in KEYWORD_PATTERNS.items()
    }


def adjust_confidence(base: int, match_score: int) -> int:
    return min(MAX_CONFIDENCE, max(MIN_CONFIDENCE, base + match_score * CONFIDENCE_PER_KEYWORD))


class HealthPredictionService:
    """Keyword-scoring disease predictor with simulated response latency."""

    def __init__(self, delay: Optional[float] = None, jitter: Optional[float] = None):
        self.delay = config.PREDICTION_DELAY if delay is None else delay
        self.jitter = config.PREDICTION_JITTER if jitter is None else jitter

    async def _simulate_latency(self, base: float, jitter: bool = True) -> None:
        wait = base + (random.random() * self.jitter if jitter else 0)
        if wait > 0:
            await asyncio.sleep(wait)

    async def predict_disease(self, symptom_data: SymptomInput) -> PredictionResult:
        """
        Predict the most likely condition for a symptom description.

        The condition with the most keyword hits wins; on a tie the one
        declared later in KEYWORD_PATTERNS is kept. No hits at all returns
        the common cold entry with its base confidence.
        """
        await self._simulate_latency(self.delay)

        scores = score_conditions(symptom_data.symptoms)

        best_condition, best_score = DEFAULT_CONDITION, -1
        for condition, score in scores.items():
            if score >= best_score:
                best_condition, best_score = condition, score

        if best_score == 0:
            logger.debug("No keyword matched, defaulting to %s", DEFAULT_CONDITION)
            return DISEASE_DATABASE[DEFAULT_CONDITION].model_copy(deep=True)

        base_result = DISEASE_DATABASE[best_condition]
        logger.debug("Predicted %s with score %d", best_condition, best_score)
        return base_result.model_copy(
            deep=True,
            update={"confidence": adjust_confidence(base_result.confidence, best_score)},
        )

    async def get_personalized_recommendations(
        self, patient_profile: Optional[PatientProfile] = None
    ) -> PersonalizedRecommendations:
        # The profile does not change the advice yet
        await self._simulate_latency(min(self.delay, 1.0), jitter=False)
        return GENERAL_RECOMMENDATIONS.model_copy(deep=True)

    def is_emergency_case(self, symptoms: str) -> bool:
        lower_symptoms = symptoms.lower()
        return any(keyword in lower_symptoms for keyword in EMERGENCY_KEYWORDS)

    async def check_symptoms(self, symptom_data: SymptomInput) -> SymptomCheckOut:
        """
        Run the full symptom checker flow.

        Emergency keywords short-circuit to a warning without predicting.

        Raises:
            ValueError: If the symptom description is empty
        """
        if not symptom_data.symptoms or not symptom_data.symptoms.strip():
            raise ValueError("Please describe your symptoms before analysing.")

        if self.is_emergency_case(symptom_data.symptoms):
            logger.warning("Emergency keywords detected in symptom check")
            return SymptomCheckOut(emergency=True, message=EMERGENCY_MESSAGE)

        prediction = await self.predict_disease(symptom_data)
        return SymptomCheckOut(emergency=False, prediction=prediction)


health_prediction_service = HealthPredictionService()
