"""
Dataset loading for the LifeSave health assistant.

Reads the bundled health dataset (or a custom one from a URL or file) and
pushes its top-level arrays into the shared dataset processor.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import httpx

from . import config
from .dataset_processor import DatasetProcessor, dataset_processor
from .records import DatasetStatistics

logger = logging.getLogger(__name__)

DATASET_SECTIONS = ("symptoms", "diseases", "precautions", "workouts", "diets")


class DatasetLoadError(Exception):
    """Raised when a custom dataset cannot be fetched or parsed."""


class DatasetLoader:
    """
    Loads health datasets into a DatasetProcessor.

    The bundled dataset is loaded at most once per process; a failure there
    leaves the chatbot on its built-in knowledge base instead of raising.
    Custom datasets read from disk must live under ``dataset_dir``.
    """

    def __init__(self, processor: Optional[DatasetProcessor] = None,
                 dataset_path: Optional[str] = None,
                 timeout: Optional[float] = None,
                 dataset_dir: Optional[str] = None):
        self.processor = processor or dataset_processor
        self.dataset_path = dataset_path or config.DATASET_PATH
        self.timeout = timeout if timeout is not None else config.DATASET_FETCH_TIMEOUT
        self.dataset_dir = dataset_dir or config.DATASET_DIR
        self.loaded = False

    async def load_sample_dataset(self) -> None:
        if self.loaded:
            logger.info("Dataset already loaded")
            return

        try:
            logger.info("Loading comprehensive health dataset from %s", self.dataset_path)
            data = self._read_file(self.dataset_path)
            self.load_from_mapping(data, require_all=True)
            self.loaded = True
            logger.info("Dataset loaded successfully: %s", self.get_stats().model_dump())
        except Exception as e:
            logger.error("Failed to load dataset: %s", e)
            logger.warning("Chatbot will use built-in knowledge base")

    async def load_custom_dataset(self, source: str) -> DatasetStatistics:
        """
        Load a dataset from an http(s) URL or a JSON file in the dataset directory.

        Relative paths are resolved against the dataset directory. Only the
        sections present in the document are replaced.

        Raises:
            ValueError: If a file path points outside the dataset directory
            DatasetLoadError: If the source cannot be fetched or parsed
        """
        is_url = source.startswith(("http://", "https://"))
        path = None if is_url else self.resolve_local_source(source)

        try:
            logger.info("Loading custom dataset from: %s", source)
            if is_url:
                data = await self._fetch_url(source)
            else:
                data = self._read_file(path)

            self.load_from_mapping(data, require_all=False)
            self.loaded = True

            stats = self.get_stats()
            logger.info("Custom dataset loaded successfully: %s", stats.model_dump())
            return stats
        except DatasetLoadError:
            raise
        except Exception as e:
            logger.error("Failed to load custom dataset from %s: %s", source, e)
            raise DatasetLoadError(f"Could not load dataset from {source}") from e

    def resolve_local_source(self, source: str) -> Path:
        """
        Resolve a file source inside the dataset directory.

        Raises:
            ValueError: If the resolved path escapes the dataset directory
        """
        root = Path(self.dataset_dir).resolve()
        path = (root / source).resolve()
        if path != root and root not in path.parents:
            logger.warning("Rejected dataset path outside %s: %s", root, source)
            raise ValueError("Dataset files must be inside the configured dataset directory")
        return path

    def load_from_mapping(self, data: Any, require_all: bool = False) -> None:
        """
        Push parsed dataset sections into the processor.

        With ``require_all`` every section is handed to the processor even
        when missing; the processor logs the bad section and keeps what it
        had. Otherwise only the sections present in ``data`` are replaced, so
        an empty array clears that section.
        """
        if not isinstance(data, dict):
            raise DatasetLoadError("Dataset must be a JSON object with top-level arrays")

        loaders = {
            "symptoms": self.processor.load_symptoms_dataset,
            "diseases": self.processor.load_diseases_dataset,
            "precautions": self.processor.load_precautions_dataset,
            "workouts": self.processor.load_workouts_dataset,
            "diets": self.processor.load_diets_dataset,
        }
        for section in DATASET_SECTIONS:
            if require_all or section in data:
                loaders[section](data.get(section))

    async def _fetch_url(self, url: str) -> Dict[str, Any]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.get(url)
        except httpx.TimeoutException as e:
            raise DatasetLoadError(f"Request for {url} timed out") from e
        except httpx.HTTPError as e:
            logger.error("HTTP error fetching %s: %s", url, e)
            raise DatasetLoadError(f"Failed to connect to {url}") from e

        if response.status_code != 200:
            raise DatasetLoadError(
                f"Dataset request for {url} failed with status {response.status_code}"
            )

        try:
            return response.json()
        except ValueError as e:
            raise DatasetLoadError(f"Dataset at {url} is not valid JSON") from e

    @staticmethod
    def _read_file(path) -> Dict[str, Any]:
        with Path(path).open("r", encoding="utf-8") as f:
            return json.load(f)

    def is_loaded(self) -> bool:
        return self.loaded

    def get_stats(self) -> DatasetStatistics:
        return self.processor.get_statistics()

    def reset(self) -> None:
        """Forget loaded data so the sample dataset can be loaded again."""
        self.processor.clear()
        self.loaded = False


dataset_loader = DatasetLoader()
