"""
Rule-based chat assistant for the LifeSave health service.

Answers are produced in a fixed order: emergency keywords first, then the
loaded dataset, then the built-in knowledge base, then general intents.
"""

import logging
from typing import Dict, List, Optional

from .dataset_processor import DatasetProcessor, dataset_processor
from .models import SymptomListAnalysis
from .records import HealthSolution

logger = logging.getLogger(__name__)

EMERGENCY_RESPONSE = (
    "🚨 MEDICAL EMERGENCY DETECTED 🚨\n\n"
    "If this is a life-threatening emergency, call 911 (US) or your local emergency number "
    "immediately. Do not wait for online advice.\n\n"
    "For severe symptoms like chest pain, difficulty breathing, or loss of consciousness, "
    "seek immediate medical attention."
)

APOLOGY_RESPONSE = (
    "I apologize, but I'm having trouble processing your request right now. For immediate "
    "health concerns, please consult a healthcare professional. You can also try our Symptom "
    "Checker below for health predictions."
)

MEDICAL_KNOWLEDGE = {
    "symptoms": {
        "headache": {
            "conditions": ["tension headache", "migraine", "cluster headache", "sinus infection"],
            "severity": "mild to moderate",
            "urgency": "low",
            "advice": "Rest, hydration, over-the-counter pain relievers. See a doctor if severe or persistent.",
        },
        "fever": {
            "conditions": ["viral infection", "bacterial infection", "flu", "covid-19"],
            "severity": "mild to severe",
            "urgency": "moderate",
            "advice": "Monitor temperature, stay hydrated, rest. Seek medical care if temperature exceeds 103°F.",
        },
        "chest pain": {
            "conditions": ["heart attack", "angina", "muscle strain", "anxiety"],
            "severity": "mild to severe",
            "urgency": "high",
            "advice": "⚠️ EMERGENCY: Call 911 immediately for chest pain. Do not wait.",
        },
        "difficulty breathing": {
            "conditions": ["asthma", "pneumonia", "heart failure", "panic attack"],
            "severity": "moderate to severe",
            "urgency": "high",
            "advice": "⚠️ EMERGENCY: Seek immediate medical attention for breathing difficulties.",
        },
        "cough": {
            "conditions": ["common cold", "bronchitis", "pneumonia", "allergies"],
            "severity": "mild to moderate",
            "urgency": "low to moderate",
            "advice": "Stay hydrated, use honey for soothing. See doctor if persistent or with fever.",
        },
        "nausea": {
            "conditions": ["food poisoning", "gastroenteritis", "pregnancy", "motion sickness"],
            "severity": "mild to moderate",
            "urgency": "low",
            "advice": "Rest, clear fluids, avoid solid foods initially. See doctor if severe or persistent.",
        },
        "fatigue": {
            "conditions": ["viral infection", "anemia", "depression", "thyroid issues"],
            "severity": "mild to severe",
            "urgency": "low",
            "advice": "Ensure adequate sleep, proper nutrition. Consult doctor if persistent fatigue.",
        },
        "abdominal pain": {
            "conditions": ["gastritis", "appendicitis", "food poisoning", "ulcer"],
            "severity": "mild to severe",
            "urgency": "moderate to high",
            "advice": "Monitor pain location and intensity. Severe abdominal pain requires immediate medical attention.",
        },
    },
    "emergency_keywords": [
        "chest pain", "difficulty breathing", "severe bleeding", "unconscious",
        "heart attack", "stroke", "severe burn", "choking", "poisoning",
        "severe allergic reaction", "suicide", "overdose",
    ],
}

SYMPTOM_CHECKER_PROMPT = (
    "💡 For a more detailed analysis, try our Symptom Checker below for personalized health insights."
)

NO_SYMPTOMS_RESPONSE = (
    "I understand you're concerned about your health. Could you describe your specific symptoms? "
    "I can help provide general information and guide you to appropriate care."
)

# Ordered (keywords, reply) pairs for non-symptom messages; first hit wins
GENERAL_RESPONSES = [
    (["hello", "hi", "hey"],
     "Hello! I'm your AI health assistant powered by comprehensive medical datasets. I can "
     "provide symptom analysis, precautions, workout recommendations, dietary advice, and "
     "complete health solutions. What health concerns can I help you with today?"),
    (["thank"],
     "You're welcome! Remember, I provide evidence-based health information including "
     "precautions, exercises, and dietary advice for educational purposes. For medical diagnosis "
     "and treatment, always consult qualified healthcare professionals. How else can I assist you?"),
    (["doctor", "medical"],
     "While I can provide comprehensive health information including symptoms analysis, "
     "precautions, workouts, and diet recommendations, it's important to consult with healthcare "
     "professionals for medical concerns. I can help you understand symptoms and provide "
     "evidence-based guidance. What would you like to know?"),
    (["medication", "treatment"],
     "I can provide general information about treatments, precautions, supportive exercises, and "
     "dietary approaches, but specific medication recommendations must come from licensed "
     "healthcare providers. Our system can suggest comprehensive care approaches. What symptoms "
     "are you experiencing?"),
    (["workout", "exercise"],
     "I can recommend specific exercises and workout routines based on your health condition or "
     "symptoms. These are evidence-based recommendations that can support your health journey. "
     "What condition or health goal would you like exercise guidance for?"),
    (["diet", "nutrition"],
     "I can provide dietary recommendations and nutritional guidance based on your health "
     "condition or symptoms. This includes foods to eat, foods to avoid, and specific dietary "
     "instructions. What health condition would you like dietary advice for?"),
]

HOW_IT_WORKS_RESPONSE = (
    "Our AI analyzes your symptoms using advanced machine learning trained on medical data. It "
    "considers symptom patterns, severity, medical knowledge, precautions, workouts, and dietary "
    "recommendations to provide comprehensive health solutions. Use our Symptom Checker for "
    "personalized predictions!"
)

DEFAULT_RESPONSE = (
    "I'm here to provide comprehensive health solutions including symptom analysis, precautions, "
    "exercise recommendations, and dietary guidance. I can help solve your health problems with "
    "evidence-based information. What specific health concern can I help you with today?"
)


def format_health_solution(solution: HealthSolution) -> str:
    """Render a HealthSolution as Markdown with an urgency marker."""
    response = f"## 🩺 Health Analysis\n{solution.analysis}\n\n"

    if solution.precautions:
        response += "## ⚠️ Precautions\n" + "\n".join(f"- {p}" for p in solution.precautions) + "\n\n"

    if solution.workouts:
        response += "## 💪 Recommended Exercises\n" + "\n".join(f"- {w}" for w in solution.workouts) + "\n\n"

    if solution.diets:
        response += "## 🥗 Dietary Recommendations\n" + "\n".join(f"- {d}" for d in solution.diets) + "\n\n"

    if solution.urgency == "high":
        response = "🚨 " + response
    elif solution.urgency == "moderate":
        response = "⚠️ " + response

    response += "\n💡 Use our Symptom Checker for more detailed analysis."
    return response


class ChatbotAI:
    """Keyword-driven health chat assistant."""

    def __init__(self, processor: Optional[DatasetProcessor] = None,
                 knowledge: Optional[Dict] = None):
        self.processor = processor or dataset_processor
        self.knowledge = knowledge or MEDICAL_KNOWLEDGE

    def is_emergency(self, message: str) -> bool:
        lower_message = message.lower()
        return any(keyword in lower_message for keyword in self.knowledge["emergency_keywords"])

    def find_symptoms(self, message: str) -> List[str]:
        """Return built-in symptom names mentioned in the message, in knowledge order."""
        lower_message = message.lower()
        return [symptom for symptom in self.knowledge["symptoms"] if symptom in lower_message]

    def generate_symptom_response(self, symptoms: List[str]) -> str:
        if not symptoms:
            return NO_SYMPTOMS_RESPONSE

        responses = []
        has_emergency = False

        for symptom in symptoms:
            info = self.knowledge["symptoms"].get(symptom)
            if not info:
                continue
            if info["urgency"] == "high":
                has_emergency = True
                responses.append(f"🚨 {info['advice']}")
            else:
                responses.append(
                    f"For {symptom}: This could indicate "
                    f"{' or '.join(info['conditions'][:2])}. {info['advice']}"
                )

        if has_emergency:
            return "\n\n".join(responses)

        return "\n\n".join(responses) + "\n\n" + SYMPTOM_CHECKER_PROMPT

    def generate_general_response(self, message: str) -> str:
        lower_message = message.lower()

        greeting_keywords, greeting = GENERAL_RESPONSES[0]
        if any(word in lower_message for word in greeting_keywords):
            return greeting

        if "how" in lower_message and ("work" in lower_message or "predict" in lower_message):
            return HOW_IT_WORKS_RESPONSE

        for keywords, reply in GENERAL_RESPONSES[1:]:
            if any(word in lower_message for word in keywords):
                return reply

        return DEFAULT_RESPONSE

    async def generate_response(self, message: str) -> str:
        """
        Produce a chat reply for a user message.

        Never raises; unexpected failures are logged and answered with an
        apology that points the user to a professional.
        """
        try:
            if self.is_emergency(message):
                logger.warning("Emergency keywords detected in chat message")
                return EMERGENCY_RESPONSE

            dataset_response = self.processor.generate_dataset_response(message)
            if dataset_response:
                return dataset_response

            solution = self.processor.generate_health_solution(message)
            if solution:
                return format_health_solution(solution)

            symptoms = self.find_symptoms(message)
            if symptoms:
                return self.generate_symptom_response(symptoms)

            return self.generate_general_response(message)

        except Exception:
            logger.exception("Error generating chat response")
            return APOLOGY_RESPONSE

    def process_symptoms_list(self, symptoms: List[str]) -> SymptomListAnalysis:
        """
        Summarise a list of selected symptoms using the built-in knowledge.

        Raises:
            ValueError: If no symptoms are given
        """
        if not symptoms:
            raise ValueError("Select at least one symptom to analyse.")

        urgency_levels = [
            self.knowledge["symptoms"].get(symptom.lower(), {}).get("urgency", "low")
            for symptom in symptoms
        ]

        if "high" in urgency_levels:
            highest_urgency = "high"
        elif "moderate" in urgency_levels:
            highest_urgency = "moderate"
        else:
            highest_urgency = "low"

        if len(symptoms) > 1:
            analysis = (
                f"Based on the combination of symptoms ({', '.join(symptoms)}), this could "
                "indicate several conditions that require medical evaluation."
            )
        else:
            analysis = (
                f'The symptom "{symptoms[0]}" can have various causes and should be properly evaluated.'
            )

        recommendations = [
            "Monitor your symptoms closely",
            "Keep a symptom diary with dates and severity",
            "Stay hydrated and get adequate rest",
            "Seek immediate medical attention" if highest_urgency == "high"
            else "Consider consulting a healthcare provider",
        ]

        return SymptomListAnalysis(
            analysis=analysis,
            urgency=highest_urgency,
            recommendations=recommendations,
        )


chatbot_ai = ChatbotAI()
