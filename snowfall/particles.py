# snowfall/particles.py
import logging
import random
from dataclasses import dataclass
from typing import Optional

import pygame

from snowfall.config import (
    CLASSIC_DURATION_RANGE,
    CLASSIC_FLAKE_COUNT,
    CLASSIC_X_RANGE,
    DEFAULT_AVERAGE_DURATION,
    DEFAULT_FLAKE_COUNT,
    JITTER,
    OPACITY_RANGE,
    SCALE_RANGE,
    SNOWFLAKE_COLOR,
    SNOWFLAKE_SIZE,
)
from snowfall.errors import InvalidConfig
from snowfall.geometry import Viewport

logger = logging.getLogger(__name__)


@dataclass
class ParticleConfig:
    """
    UI(슬라이더 등)에서 바꾸는 값.
    바꿔도 이미 떨어지고 있는 눈송이에는 적용 안 되고,
    다음 rebuild 때 새로 만드는 눈송이부터 적용된다.
    """
    count: int = DEFAULT_FLAKE_COUNT
    average_duration: float = DEFAULT_AVERAGE_DURATION
    duration_spread: float = 0.0                       # 0이면 전부 average_duration
    x_range: Optional[tuple[float, float]] = None      # None이면 [0, viewport.width]

    @classmethod
    def classic(cls) -> "ParticleConfig":
        """개수 50개, 2~5초 고정 범위인 첫 번째 버전."""
        lo, hi = CLASSIC_DURATION_RANGE
        return cls(
            count=CLASSIC_FLAKE_COUNT,
            average_duration=(lo + hi) * 0.5,
            duration_spread=(hi - lo) * 0.5,
            x_range=CLASSIC_X_RANGE,
        )

    def validate(self):
        # bool도 int의 하위 클래스라서 따로 막는다
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            raise InvalidConfig(f"count must be an int, got {self.count!r}")
        if self.count < 0:
            raise InvalidConfig(f"count must be >= 0, got {self.count}")
        if not self.average_duration > 0:
            raise InvalidConfig(
                f"average_duration must be positive, got {self.average_duration}"
            )
        if self.duration_spread < 0 or self.duration_spread >= self.average_duration:
            raise InvalidConfig(
                f"duration_spread must be in [0, {self.average_duration}), "
                f"got {self.duration_spread}"
            )
        if self.x_range is not None and self.x_range[0] > self.x_range[1]:
            raise InvalidConfig(f"x_range is reversed: {self.x_range}")


@dataclass(frozen=True)
class Particle:
    """
    눈송이 하나의 고정 속성. 만들 때 한 번 뽑고 끝까지 안 바뀐다.
    """
    x_position: float
    jitter: float        # 프레임마다 x 흔들림 폭
    scale: float         # 0.5 ~ 1.5
    opacity: float       # 0.1 ~ 1.0
    duration: float      # 한 번 떨어지는 데 걸리는 시간 (초)
    start_delay: float   # 0 <= delay < duration


class ParticleFactory:
    def __init__(self, rng: Optional[random.Random] = None):
        # rng 안 넘기면 random 모듈 전역 상태를 그대로 사용
        self.rng = rng if rng is not None else random

    def create(self, viewport: Viewport, config: ParticleConfig) -> Particle:
        config.validate()
        return self._draw(viewport, config)

    def create_many(self, viewport: Viewport, config: ParticleConfig) -> list[Particle]:
        config.validate()
        particles = [self._draw(viewport, config) for _ in range(config.count)]
        logger.debug("created %d particles for %sx%s",
                     len(particles), viewport.width, viewport.height)
        return particles

    def _draw(self, viewport: Viewport, config: ParticleConfig) -> Particle:
        rng = self.rng

        if config.x_range is None:
            x_lo, x_hi = 0.0, viewport.width
        else:
            x_lo, x_hi = config.x_range

        avg = config.average_duration
        spread = config.duration_spread
        if spread > 0:
            duration = rng.uniform(avg - spread, avg + spread)
        else:
            duration = avg

        # random()은 [0, 1) 이라서 delay < duration 보장
        delay = rng.random() * duration
        if delay >= duration:
            delay = 0.0

        return Particle(
            x_position=rng.uniform(x_lo, x_hi),
            jitter=JITTER,
            scale=rng.uniform(*SCALE_RANGE),
            opacity=rng.uniform(*OPACITY_RANGE),
            duration=duration,
            start_delay=delay,
        )


# -------- 스프라이트 --------
def make_snowflake_surface(size: int = SNOWFLAKE_SIZE,
                           color=SNOWFLAKE_COLOR) -> pygame.Surface:
    """
    기본 눈송이 모양: 가지 6개 + 가지마다 작은 V자.
    """
    surf = pygame.Surface((size, size), pygame.SRCALPHA)
    c = pygame.Vector2(size * 0.5, size * 0.5)
    arm = size * 0.45
    width = max(1, size // 15)

    for i in range(6):
        direction = pygame.Vector2(0, -1).rotate(i * 60)
        tip = c + direction * arm
        pygame.draw.line(surf, color, c, tip, width)

        # 가지 중간쯤에서 양옆으로 작은 가지
        mid = c + direction * (arm * 0.6)
        for side in (-40, 40):
            branch = mid + direction.rotate(side) * (arm * 0.3)
            pygame.draw.line(surf, color, mid, branch, width)

    pygame.draw.circle(surf, color, (int(c.x), int(c.y)), max(1, width))
    return surf


def make_particle_sprite(particle: Particle, base: pygame.Surface) -> pygame.Surface:
    """
    눈송이 개별 스프라이트: scale + opacity 미리 적용.
    scale/opacity는 안 바뀌니까 빌드 때 한 번만 만든다.
    """
    sprite = pygame.transform.rotozoom(base, 0.0, particle.scale)
    sprite.set_alpha(round(particle.opacity * 255))
    return sprite
