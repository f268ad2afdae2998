"""
Main FastAPI application for the LifeSave health assistant.

Exposes the chat assistant, the symptom checker and the dataset status
endpoints. All analysis is keyword matching over the in-memory dataset.
"""

import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__, config
from .audit import log_interaction
from .chatbot import chatbot_ai
from .dataset_loader import DatasetLoadError, dataset_loader
from .dataset_processor import dataset_processor
from .db import init_database
from .models import (
    AvailableSymptomsOut,
    ChatIn,
    ChatOut,
    DatasetLoadIn,
    DatasetStatusOut,
    PatientProfile,
    PersonalizedRecommendations,
    SymptomCheckOut,
    SymptomInput,
    SymptomListAnalysis,
    SymptomListIn,
)
from .prediction import health_prediction_service
from .records import HealthSolution
from .symptom_selector import filter_available

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="LifeSave Health Assistant",
    description="Symptom checker and health chat assistant backed by a curated health dataset",
    version=__version__
)


def _friendly_validation_message(field: str, message: str) -> str:
    """Convert a pydantic error message into something a user can act on."""
    lower = message.lower()
    label = str(field).replace('_', ' ').capitalize()

    if lower.startswith('value error, '):
        return message[len('value error, '):]
    if 'field required' in lower:
        return f"{label} is required"
    if 'should have at least' in lower:
        return f"{label} cannot be empty"
    if 'should have at most' in lower:
        return f"{label} is too long. Please keep it under 1000 characters."
    if 'valid string' in lower or 'valid list' in lower or 'valid integer' in lower:
        return f"{label} has an invalid type"
    return message


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle Pydantic validation errors with a single user-friendly message."""
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={'detail': 'Invalid input provided'}
        )

    first = errors[0]
    location = first.get('loc') or ['unknown']
    field = next((part for part in reversed(location) if isinstance(part, str)), 'input')
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': _friendly_validation_message(field, first.get('msg', 'Invalid input'))}
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={'detail': str(exc)}
    )


@app.exception_handler(DatasetLoadError)
async def dataset_load_error_handler(request: Request, exc: DatasetLoadError):
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={'detail': str(exc)}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors gracefully."""
    logger.exception("Unexpected error handling %s", request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={'detail': 'An unexpected error occurred. Please try again later.'}
    )


@app.on_event("startup")
async def startup_event():
    """Initialize the audit database and load the bundled dataset."""
    try:
        init_database()
    except Exception as e:
        logger.warning("Database initialization failed, interactions will not be logged: %s", e)

    await dataset_loader.load_sample_dataset()


app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.post("/api/chat", response_model=ChatOut)
async def chat(chat_request: ChatIn):
    """
    Answer a chat message.

    Emergencies get a fixed warning; otherwise the dataset, the built-in
    knowledge base and the general intents are tried in turn.
    """
    user_message = chat_request.message
    reply = await chatbot_ai.generate_response(user_message)

    if not reply or not reply.strip():
        reply = ("I apologize, but I'm having trouble generating a response right now. "
                 "Please try rephrasing your question or try again in a moment.")

    urgency = "high" if chatbot_ai.is_emergency(user_message) else None
    log_interaction("chat", user_message, reply, urgency=urgency)

    return ChatOut(reply=reply)


@app.post("/api/symptom-check", response_model=SymptomCheckOut)
async def symptom_check(symptom_request: SymptomInput):
    """
    Run the symptom checker.

    Returns an emergency warning without a prediction when emergency
    keywords are present.
    """
    result = await health_prediction_service.check_symptoms(symptom_request)

    if result.emergency:
        log_interaction("symptom_check", symptom_request.symptoms, result.message or "",
                        urgency="high")
    else:
        log_interaction("symptom_check", symptom_request.symptoms,
                        result.prediction.disease if result.prediction else "")

    return result


@app.post("/api/symptoms/analyze", response_model=SymptomListAnalysis)
async def analyze_symptom_list(symptom_list: SymptomListIn):
    return chatbot_ai.process_symptoms_list(symptom_list.symptoms)


@app.get("/api/symptoms/available", response_model=AvailableSymptomsOut)
async def available_symptoms(
    search: str = Query("", max_length=100),
    selected: Optional[List[str]] = Query(None),
):
    """List catalog symptoms not yet selected, filtered by ``search``."""
    return AvailableSymptomsOut(symptoms=filter_available(selected or [], search))


@app.post("/api/solution", response_model=HealthSolution)
async def health_solution(chat_request: ChatIn):
    solution = dataset_processor.generate_health_solution(chat_request.message)
    if solution is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No matching symptoms or conditions were found in the health dataset."
        )
    return solution


@app.post("/api/recommendations", response_model=PersonalizedRecommendations)
async def recommendations(profile: Optional[PatientProfile] = None):
    return await health_prediction_service.get_personalized_recommendations(profile)


@app.get("/api/dataset/status", response_model=DatasetStatusOut)
async def dataset_status():
    return DatasetStatusOut(loaded=dataset_loader.is_loaded(), stats=dataset_loader.get_stats())


@app.post("/api/dataset/load", response_model=DatasetStatusOut)
async def load_dataset(load_request: DatasetLoadIn):
    """
    Load a custom dataset from a URL or a file in the dataset directory.

    Raises:
        ValueError: Mapped to 400 when a file path leaves the dataset directory
        DatasetLoadError: Mapped to 502 when the source cannot be loaded
    """
    stats = await dataset_loader.load_custom_dataset(load_request.source)
    return DatasetStatusOut(loaded=dataset_loader.is_loaded(), stats=stats)


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": "lifesave-health-assistant",
        "version": __version__,
        "dataset_loaded": dataset_loader.is_loaded(),
    }
