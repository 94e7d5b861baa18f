# snowfall/geometry.py
from dataclasses import dataclass

from snowfall.config import MARGIN


@dataclass(frozen=True)
class Viewport:
    width: float    # 논리 픽셀
    height: float

    @classmethod
    def from_surface(cls, surface) -> "Viewport":
        w, h = surface.get_size()
        return cls(w, h)


@dataclass(frozen=True)
class FallPath:
    start_y: float   # 화면 위 (-margin)
    end_y: float     # 화면 아래 (+margin)

    @property
    def length(self) -> float:
        return self.end_y - self.start_y


def get_fall_path(viewport: Viewport, margin: float = MARGIN) -> FallPath:
    """
    viewport 기준으로 눈송이가 지나가는 세로 경로를 정의.
    위쪽은 화면 밖 -margin, 아래쪽은 화면 높이 + margin.
    모든 눈송이가 같은 경로를 쓰고, 타이밍만 다르다.
    """
    return FallPath(start_y=-margin, end_y=viewport.height + margin)
