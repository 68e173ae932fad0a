"""
ChromaDB vector store client.

Talks to a Chroma server over HTTP: connection heartbeat, collection
get-or-create, and adding, querying and deleting documents. Embeddings are
computed by the collection's embedding function.
"""
from typing import Any, Callable, Dict, List, Optional

import chromadb
from chromadb.config import Settings
from chromadb.utils import embedding_functions

from metis_mcp_core.errors import InvalidArgumentError, NotInitializedError
from metis_mcp_core.utils.config import VectorStoreConfig
from metis_mcp_core.utils.logger import get_logger

logger = get_logger(__name__)

ClientFactory = Callable[..., Any]


def build_embedding_function(options: Optional[Dict[str, Any]]) -> Optional[Any]:
    """
    Create a Chroma embedding function from a {type, apiKey, modelName} mapping.

    Supported types: "default" (Chroma's built-in), "sentence-transformers", "openai".

    Returns:
        Embedding function, or None to use the collection default
    """
    if not options:
        return None

    kind = (options.get("type") or "").lower()
    model_name = options.get("modelName")

    if kind == "default":
        return embedding_functions.DefaultEmbeddingFunction()
    if kind in ("sentence-transformers", "sentence_transformers"):
        return embedding_functions.SentenceTransformerEmbeddingFunction(
            model_name=model_name or "all-MiniLM-L6-v2"
        )
    if kind == "openai":
        if not options.get("apiKey"):
            raise InvalidArgumentError("apiKey is required for the openai embedding function")
        return embedding_functions.OpenAIEmbeddingFunction(
            api_key=options["apiKey"],
            model_name=model_name or "text-embedding-ada-002"
        )

    raise InvalidArgumentError(f"Unsupported embedding function type: {options.get('type')}")


class ChromaVectorStore:
    """
    Vector store backed by a Chroma server.

    Example:
        >>> store = ChromaVectorStore()
        >>> store.connect("localhost", 8000)
        >>> store.get_or_create_collection("docs")
        >>> store.add_documents(["hello"], ids=["doc-1"])
        >>> store.query(["greeting"], n_results=1)
    """

    def __init__(
        self,
        config: Optional[VectorStoreConfig] = None,
        client_factory: Optional[ClientFactory] = None
    ):
        """
        Initialize the store (no connection is made until connect()).

        Args:
            config: VectorStoreConfig (defaults if None)
            client_factory: Callable creating the client (default: chromadb.HttpClient)
        """
        self.config = config or VectorStoreConfig()
        self.client_factory = client_factory or chromadb.HttpClient
        self.client = None
        self.collection = None
        self.collection_name: Optional[str] = None

    def connect(self, host: str, port: Optional[int] = None) -> None:
        """Create the HTTP client and check the server heartbeat."""
        port = port or self.config.port

        client = self.client_factory(
            host=host,
            port=port,
            ssl=self.config.ssl,
            settings=Settings(anonymized_telemetry=self.config.anonymized_telemetry),
        )
        client.heartbeat()

        self.client = client
        self.collection = None
        self.collection_name = None
        logger.info(f"Connected to Chroma at {host}:{port}")

    def get_or_create_collection(
        self,
        name: str,
        metadata: Optional[Dict[str, Any]] = None,
        embedding_function: Optional[Dict[str, Any]] = None
    ):
        """
        Get or create a collection and make it the active one.

        Args:
            name: Collection name
            metadata: Collection metadata (e.g. {"hnsw:space": "cosine"})
            embedding_function: {type, apiKey, modelName} mapping, see build_embedding_function
        """
        if self.client is None:
            raise NotInitializedError("Vector store connection not initialized")

        kwargs: Dict[str, Any] = {"name": name}
        if metadata:
            kwargs["metadata"] = metadata
        function = build_embedding_function(embedding_function)
        if function is not None:
            kwargs["embedding_function"] = function

        self.collection = self.client.get_or_create_collection(**kwargs)
        self.collection_name = name

        logger.info(f"Collection ready: {name}")
        return self.collection

    def _require_collection(self):
        if self.collection is None:
            raise NotInitializedError("Collection not initialized")
        return self.collection

    def add_documents(
        self,
        documents: List[str],
        ids: List[str],
        metadatas: Optional[List[Dict[str, Any]]] = None
    ) -> int:
        """
        Add documents to the active collection.

        Returns:
            Number of documents added
        """
        collection = self._require_collection()

        if len(documents) != len(ids):
            raise InvalidArgumentError(
                f"documents ({len(documents)}) and ids ({len(ids)}) must have the same length"
            )
        if metadatas is not None and len(metadatas) != len(documents):
            raise InvalidArgumentError(
                f"metadatas ({len(metadatas)}) and documents ({len(documents)}) must have the same length"
            )

        collection.add(documents=documents, ids=ids, metadatas=metadatas or None)

        logger.info(f"Added {len(documents)} documents to {self.collection_name}")
        return len(documents)

    def query(
        self,
        query_texts: List[str],
        n_results: Optional[int] = None,
        where: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Similarity query against the active collection.

        Returns:
            Chroma query result (ids, documents, metadatas, distances per query text)
        """
        collection = self._require_collection()

        results = collection.query(
            query_texts=query_texts,
            n_results=n_results or self.config.n_results,
            where=where or None
        )

        return {key: value for key, value in dict(results).items() if value is not None}

    def delete_documents(self, ids: List[str]) -> int:
        """Delete documents by id from the active collection."""
        collection = self._require_collection()
        collection.delete(ids=ids)

        logger.info(f"Deleted {len(ids)} documents from {self.collection_name}")
        return len(ids)

    def list_collections(self) -> List[str]:
        """List collection names on the server."""
        if self.client is None:
            raise NotInitializedError("Vector store connection not initialized")

        collections = self.client.list_collections()
        return [c if isinstance(c, str) else c.name for c in collections]


__all__ = ["ChromaVectorStore", "build_embedding_function"]
