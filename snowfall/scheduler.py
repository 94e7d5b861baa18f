# snowfall/scheduler.py
import math
import random

from snowfall.config import CYCLE_EPSILON
from snowfall.geometry import FallPath
from snowfall.particles import Particle


class AnimationScheduler:
    """
    눈송이 하나의 움직임을 담당.
    상태:
    - 'pending' : start_delay 전, 화면 위(start_y)에서 대기
    - 'falling' : start_y → end_y 로 직선 낙하, 끝나면 바로 처음부터 반복

    시간 t(씬 시작 후 경과 초)만 넣으면 위치가 나오는 순수 함수라서
    프레임을 얼마나 자주 그리든 결과는 같다.
    """
    STATE_PENDING = "pending"
    STATE_FALLING = "falling"

    def __init__(self, particle: Particle, path: FallPath):
        self.particle = particle
        self.path = path

    def _local_time(self, t: float) -> float:
        return t - self.particle.start_delay

    def state_at(self, t: float) -> str:
        if self._local_time(t) < 0:
            return AnimationScheduler.STATE_PENDING
        return AnimationScheduler.STATE_FALLING

    def cycle_at(self, t: float) -> int:
        """몇 번째 낙하 중인지 (대기 중 + 첫 낙하 = 0)."""
        local = self._local_time(t)
        if local <= 0:
            return 0
        duration = self.particle.duration
        cycle = int(local // duration)
        # 정확히 한 바퀴 끝난 순간은 아직 이전 사이클로 본다 (첫 낙하 시작은 제외)
        if self._at_cycle_end(local):
            cycle -= 1
        return max(cycle, 0)

    def _at_cycle_end(self, local: float) -> bool:
        duration = self.particle.duration
        return (local >= duration
                and math.fmod(local, duration) <= CYCLE_EPSILON * duration)

    def progress(self, t: float) -> float:
        """
        0~1: 현재 사이클에서 얼마나 내려왔는지.
        사이클이 딱 끝나는 순간은 1.0 (바닥 도착), 그 직후부터 다시 0 근처.
        """
        local = self._local_time(t)
        if local <= 0:
            return 0.0

        if self._at_cycle_end(local):
            return 1.0
        duration = self.particle.duration
        return max(0.0, min(1.0, math.fmod(local, duration) / duration))

    def position(self, t: float) -> float:
        """t 시점의 y좌표. 대기 중이면 정확히 start_y."""
        if self._local_time(t) < 0:
            return self.path.start_y
        return self.path.start_y + self.path.length * self.progress(t)

    def x_at(self, rng=random) -> float:
        """프레임마다 살짝 흔들리는 x좌표."""
        jitter = self.particle.jitter
        if jitter <= 0:
            return self.particle.x_position
        return self.particle.x_position + rng.uniform(-jitter, jitter)
