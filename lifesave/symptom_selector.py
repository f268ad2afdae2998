"""
Interactive symptom selection for the symptom checker form.

Keeps the list of symptoms a user has picked, with per-symptom severity, and
offers the remaining catalog entries for search-as-you-type.
"""

from typing import Iterable, List, Optional

from .models import SelectedSymptom

AVAILABLE_SYMPTOMS = [
    "Fever", "Cough", "Headache", "Nausea", "Dizziness", "Chest pain",
    "Shortness of breath", "Muscle aches", "Joint pain", "Rash",
    "Abdominal pain", "Vomiting", "Diarrhea", "Loss of appetite",
    "Insomnia", "Anxiety", "Depression", "Back pain"
]


def filter_available(present: Iterable[str], search_term: str = "",
                     catalog: Optional[List[str]] = None) -> List[str]:
    """Catalog entries not already present whose name contains ``search_term``."""
    taken = set(present)
    term = (search_term or "").lower()
    return [
        symptom for symptom in (catalog or AVAILABLE_SYMPTOMS)
        if symptom not in taken and term in symptom.lower()
    ]


class SymptomSelection:
    """
    Mutable selection state behind the interactive selector.

    Symptoms passed in at construction start out selected.
    """

    def __init__(self, initial: Optional[Iterable[SelectedSymptom]] = None):
        self.symptoms: List[SelectedSymptom] = [
            symptom.model_copy(update={"selected": True}) for symptom in (initial or [])
        ]

    def _find(self, name: str) -> Optional[SelectedSymptom]:
        for symptom in self.symptoms:
            if symptom.name == name:
                return symptom
        return None

    def toggle(self, name: str) -> None:
        symptom = self._find(name)
        if symptom is not None:
            symptom.selected = not symptom.selected

    def add(self, name: str) -> None:
        if self._find(name) is None:
            self.symptoms.append(SelectedSymptom(name=name))

    def remove(self, name: str) -> None:
        self.symptoms = [s for s in self.symptoms if s.name != name]

    def update_severity(self, name: str, severity: str) -> None:
        symptom = self._find(name)
        if symptom is not None:
            # Re-validate so an unknown label raises instead of being stored
            updated = SelectedSymptom(**{**symptom.model_dump(), "severity": severity})
            symptom.severity = updated.severity

    def selected(self) -> List[SelectedSymptom]:
        return [s for s in self.symptoms if s.selected]

    def selected_names(self) -> List[str]:
        return [s.name for s in self.selected()]

    def available(self, search_term: str = "") -> List[str]:
        return filter_available((s.name for s in self.symptoms), search_term)
