"""
Visual embedding model.

ColorHistogramEmbeddingModel downloads an image and describes it by a joint
RGB colour histogram. It is cheap, dependency-light and good enough to pull
visually similar cats together; anything with the same async embed(url)
signature can replace it.
"""

import asyncio
import io
from typing import List, Optional

import numpy as np
import requests
from PIL import Image, UnidentifiedImageError

from feed_engine.errors import EmbeddingError, ImageUnavailableError


class ColorHistogramEmbeddingModel:
    """
    Joint RGB histogram over a downscaled thumbnail.

    Args:
        bins: buckets per channel; vector length is bins ** 3
        thumbnail: longest side the image is reduced to before counting
    """

    def __init__(
        self,
        bins: int = 8,
        thumbnail: int = 96,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ):
        self.bins = bins
        self.thumbnail = thumbnail
        self.session = session or requests.Session()
        self.timeout = timeout

    @property
    def dimension(self) -> int:
        return self.bins ** 3

    def _download(self, url: str) -> bytes:
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise ImageUnavailableError(url, url, e) from e
        return response.content

    def histogram(self, image: Image.Image) -> np.ndarray:
        """Normalized joint histogram of an RGB image (first frame for animations)."""
        image = image.convert("RGB")
        image.thumbnail((self.thumbnail, self.thumbnail))
        pixels = np.asarray(image, dtype=np.uint8).reshape(-1, 3)
        if pixels.size == 0:
            raise EmbeddingError("image has no pixels")
        quantized = (pixels.astype(np.int32) * self.bins) // 256
        index = (quantized[:, 0] * self.bins + quantized[:, 1]) * self.bins + quantized[:, 2]
        counts = np.bincount(index, minlength=self.dimension).astype(np.float32)
        # Square root damps the dominance of large flat backgrounds.
        return np.sqrt(counts / counts.sum())

    def embed_bytes(self, data: bytes) -> List[float]:
        try:
            with Image.open(io.BytesIO(data)) as image:
                vector = self.histogram(image)
        except (UnidentifiedImageError, OSError) as e:
            raise EmbeddingError(f"could not decode image: {e}") from e
        return vector.tolist()

    def _embed_sync(self, url: str) -> List[float]:
        return self.embed_bytes(self._download(url))

    async def embed(self, url: str) -> List[float]:
        return await asyncio.to_thread(self._embed_sync, url)
