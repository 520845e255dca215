# routefinder/map/classifier.py
import numpy as np

from .grid_map import PassabilityGrid
from routefinder.exceptions import ConfigurationError


class PixelClassifier:
    """
    像素分类器：亮色 = 道路，暗色 = 障碍 (建筑等)。
    只接受已经解码好的像素矩阵，图像文件的读取不在这里做。

    亮度 = (R + G + B) // 3，亮度 > threshold 判为可通行。
    """

    def __init__(self, threshold: int = 200):
        if not 0 <= threshold <= 255:
            raise ValueError(f"threshold must be in [0, 255], got {threshold}")
        self.threshold = threshold

    def brightness(self, pixels: np.ndarray) -> np.ndarray:
        img = np.asarray(pixels)
        if img.ndim not in (2, 3) or img.size == 0:
            raise ConfigurationError(f"Expected a non-empty grey (H, W) or RGB(A) (H, W, C) image, got shape {img.shape}")
        if img.ndim == 3 and img.shape[2] < 3:
            raise ConfigurationError(f"Colour image needs at least 3 channels, got {img.shape[2]}")

        # matplotlib 读 PNG 会给出 [0, 1] 的 float
        if np.issubdtype(img.dtype, np.floating) and img.max() <= 1.0:
            img = img * 255.0
        img = img.astype(np.int64)

        if img.ndim == 2:
            return img
        # alpha 通道忽略
        return img[:, :, :3].sum(axis=2) // 3

    def classify(self, pixels: np.ndarray) -> PassabilityGrid:
        return PassabilityGrid(self.brightness(pixels) > self.threshold)
