import logging
from functools import cached_property

import numpy as np
from sentence_transformers import SentenceTransformer

from src.core.errors import NotReadyError

logger = logging.getLogger(__name__)


class SentenceTransformerEmbedder:
    def __init__(self, model_name: str = "sentence-transformers/all-MiniLM-L6-v2"):
        self._model_name = model_name

    @cached_property
    def model(self) -> SentenceTransformer:
        logger.info(f"Loading embedding model: {self._model_name}")
        return SentenceTransformer(self._model_name)

    def is_ready(self) -> bool:
        return "model" in self.__dict__

    def warmup(self) -> None:
        _ = self.model
        logger.info("Embedding model warmed up")

    def encode(self, texts: str | list[str]) -> np.ndarray:
        if not self.is_ready():
            raise NotReadyError("Embedder not initialized. Call warmup() first.")
        return self.model.encode(texts, convert_to_numpy=True, normalize_embeddings=True)
