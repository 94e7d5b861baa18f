# snowfall/image_loader.py
import io
import logging
import os
from concurrent.futures import Future, ThreadPoolExecutor

import pygame

from snowfall.errors import ImageDecodeFailure

logger = logging.getLogger(__name__)


def decode_image(handle) -> pygame.Surface:
    """
    사용자가 고른 이미지 handle을 pygame Surface로 디코딩.
    handle: 파일 경로(str / PathLike), bytes, 또는 바이너리 파일 객체.
    실패하면 전부 ImageDecodeFailure 로 바꿔서 올린다.
    """
    if handle is None:
        raise ImageDecodeFailure("no image selected")

    if isinstance(handle, (bytes, bytearray)):
        source = io.BytesIO(handle)
    elif isinstance(handle, (str, os.PathLike)):
        source = os.fspath(handle)
    else:
        source = handle

    try:
        image = pygame.image.load(source)
    except (pygame.error, OSError, ValueError, TypeError) as e:
        raise ImageDecodeFailure(f"could not decode image {handle!r}: {e}") from e

    if image.get_width() == 0 or image.get_height() == 0:
        raise ImageDecodeFailure(f"image {handle!r} is empty")
    return image


class ImageLoader:
    """
    배경 이미지를 렌더 루프 밖(워커 스레드 1개)에서 디코딩.
    결과는 Future로 돌려주고, 꺼내 쓰는 건 SceneComposer가 다음 프레임에 한다.
    재시도 / 타임아웃 / 취소 없음.
    """

    def __init__(self, executor=None):
        self._owns_executor = executor is None
        self.executor = executor or ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="snowfall-image"
        )

    def load(self, handle) -> Future:
        logger.debug("loading background image %r", handle)
        return self.executor.submit(decode_image, handle)

    def shutdown(self):
        # 진행 중인 디코딩은 기다리지 않는다 (결과는 버려짐)
        if self._owns_executor:
            self.executor.shutdown(wait=False)
