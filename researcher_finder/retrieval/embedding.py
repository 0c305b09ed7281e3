import hashlib
import logging
import threading
from typing import List, Optional

import numpy as np
from sentence_transformers import SentenceTransformer

from researcher_finder.core.config import Settings

logger = logging.getLogger(__name__)

_models = {}
_models_lock = threading.Lock()


def get_embedding_model(model_name: str) -> SentenceTransformer:
    model = _models.get(model_name)
    if model is not None:
        return model

    # Loads run in worker threads; only one may build a given model
    with _models_lock:
        model = _models.get(model_name)
        if model is None:
            logger.info(f"Loading embedding model {model_name}")
            model = SentenceTransformer(
                model_name,
                device="cpu",
                trust_remote_code=True,
            )
            model.eval()
            _models[model_name] = model
    return model


def embed_query(text: str, model_name: str) -> list[float]:
    model = get_embedding_model(model_name)
    return model.encode(
        text,
        normalize_embeddings=True,
        convert_to_numpy=True,
        show_progress_bar=False,
    ).tolist()


def placeholder_vector(text: str, dimension: int) -> List[float]:
    """
    Deterministic stand-in embedding for when the model is unavailable.

    The same text always yields the same unit-length vector.
    """
    seed = int.from_bytes(hashlib.sha256(text.encode("utf-8")).digest()[:8], "big")
    rng = np.random.default_rng(seed)
    vector = rng.standard_normal(max(dimension, 1))
    return (vector / np.linalg.norm(vector)).tolist()


class Embedder:
    """Query embedder bound to the configured sentence-transformers model."""

    def __init__(self, settings: Settings):
        self.model_name: Optional[str] = settings.EMBEDDING_MODEL
        self.dimension = settings.EMBEDDING_DIMENSION

    def embed(self, text: str) -> List[float]:
        if not self.model_name:
            logger.warning("No embedding model configured, using placeholder vector")
            return placeholder_vector(text, self.dimension)
        return embed_query(text, self.model_name)
