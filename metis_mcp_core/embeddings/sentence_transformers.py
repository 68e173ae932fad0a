"""
Local embeddings with sentence-transformers.

Backs the "local" provider of generate_embeddings: the model is downloaded
once from the HuggingFace hub and then runs in-process, no API key needed.
"""

from typing import List, Optional

import numpy as np
import torch
from sentence_transformers import SentenceTransformer

from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_MODEL = "all-MiniLM-L6-v2"
DEFAULT_BATCH_SIZE = 32


def detect_device() -> str:
    """Pick cuda, then Apple mps, then cpu."""
    if torch.cuda.is_available():
        return "cuda"
    mps = getattr(torch.backends, "mps", None)
    if mps is not None and mps.is_available():
        return "mps"
    return "cpu"


class EmbeddingModel:
    """
    In-process sentence-transformers model.

    Example:
        >>> model = EmbeddingModel("all-MiniLM-L6-v2")
        >>> vectors = model.embed(["vector search", "keyword search"])
        >>> vectors.shape
        (2, 384)
    """

    def __init__(
        self,
        model_name: Optional[str] = None,
        device: Optional[str] = None,
        batch_size: int = DEFAULT_BATCH_SIZE
    ):
        """
        Load the model.

        Args:
            model_name: HuggingFace model id (default: all-MiniLM-L6-v2)
            device: 'cpu', 'cuda' or 'mps' (auto-detected if None)
            batch_size: Texts encoded per forward pass
        """
        self.model_name = model_name or DEFAULT_MODEL
        self.device = device or detect_device()
        self.batch_size = batch_size

        logger.info(f"Loading embedding model {self.model_name} on {self.device}")
        self.model = SentenceTransformer(self.model_name, device=self.device)
        self.dimension = self.model.get_sentence_embedding_dimension()

    def embed(self, texts: List[str], normalize: bool = True) -> np.ndarray:
        """
        Encode texts into a (len(texts), dimension) float array.

        Vectors are L2-normalized unless normalize is False.
        """
        if not texts:
            return np.empty((0, self.dimension), dtype=np.float32)

        return self.model.encode(
            texts,
            batch_size=self.batch_size,
            show_progress_bar=False,
            normalize_embeddings=normalize,
            convert_to_numpy=True
        )


__all__ = ["EmbeddingModel", "DEFAULT_MODEL", "detect_device"]
