"""Backing logic: content sources, session storage, visual embeddings."""

from .content_sources import (
    CataasSource,
    HttpContentSource,
    JsonFileSource,
    ShibeSource,
    TheCatApiSource,
    build_sources,
    ext_to_mime,
)
from .embedding_model import ColorHistogramEmbeddingModel
from .session_store import (
    LIKES_KEY,
    BlobSessionStore,
    BlobStore,
    FileBlobStore,
    MemoryBlobStore,
    decode_history,
)

__all__ = [
    "CataasSource",
    "HttpContentSource",
    "JsonFileSource",
    "ShibeSource",
    "TheCatApiSource",
    "build_sources",
    "ext_to_mime",
    "ColorHistogramEmbeddingModel",
    "LIKES_KEY",
    "BlobSessionStore",
    "BlobStore",
    "FileBlobStore",
    "MemoryBlobStore",
    "decode_history",
]
