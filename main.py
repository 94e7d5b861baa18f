# main.py
import logging
import sys

import pygame

from snowfall.config import (
    AVERAGE_DURATION_RANGE,
    AVERAGE_DURATION_STEP,
    FLAKE_COUNT_RANGE,
    FLAKE_COUNT_STEP,
    FPS,
    HUD_COLOR,
    HUD_FONT_SIZE,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    WINDOW_TITLE,
    clamp,
)
from snowfall.geometry import Viewport
from snowfall.logging_config import setup_logging
from snowfall.particles import ParticleConfig
from snowfall.scene import SceneComposer

logger = logging.getLogger("snowfall.main")


def handle_key(scene: SceneComposer, key) -> bool:
    """
    슬라이더 대신 키보드로 설정 조절.
    처리한 키면 True.
    """
    cfg = scene.config

    if key == pygame.K_UP:
        scene.set_count(clamp(cfg.count + FLAKE_COUNT_STEP, *FLAKE_COUNT_RANGE))
    elif key == pygame.K_DOWN:
        scene.set_count(clamp(cfg.count - FLAKE_COUNT_STEP, *FLAKE_COUNT_RANGE))
    elif key == pygame.K_RIGHT:
        scene.set_average_duration(
            clamp(cfg.average_duration + AVERAGE_DURATION_STEP, *AVERAGE_DURATION_RANGE)
        )
    elif key == pygame.K_LEFT:
        # 클래식처럼 spread가 있으면 average는 spread보다 커야 함
        lo = max(AVERAGE_DURATION_RANGE[0], cfg.duration_spread + AVERAGE_DURATION_STEP)
        scene.set_average_duration(
            clamp(cfg.average_duration - AVERAGE_DURATION_STEP, lo, AVERAGE_DURATION_RANGE[1])
        )
    elif key == pygame.K_c:
        # 클래식 <-> 설정 가능한 버전 전환
        if cfg.x_range is None:
            scene.set_config(ParticleConfig.classic())
        else:
            scene.set_config(ParticleConfig())
    elif key == pygame.K_r:
        scene.rebuild()
    else:
        return False
    return True


def draw_hud(screen, font, scene: SceneComposer):
    cfg = scene.config
    text = f"flakes {cfg.count}  duration {cfg.average_duration:.1f}s"
    if scene.is_loading_background:
        text += "  (loading photo...)"
    label = font.render(text, True, HUD_COLOR)
    screen.blit(label, (10, screen.get_height() - label.get_height() - 10))


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    setup_logging(logging.INFO)

    pygame.init()
    screen = pygame.display.set_mode((SCREEN_WIDTH, SCREEN_HEIGHT), pygame.RESIZABLE)
    pygame.display.set_caption(WINDOW_TITLE)
    clock = pygame.time.Clock()
    font = pygame.font.Font(None, HUD_FONT_SIZE)

    # -------------------------------
    # 씬 초기화 (viewport는 빌드할 때 한 번만 읽음)
    # -------------------------------
    scene = SceneComposer(Viewport.from_surface(screen))

    # 실행할 때 이미지 경로 넘기면 바로 배경으로
    if argv:
        scene.select_background(argv[0])

    # -------------------------------
    # 게임 루프
    # -------------------------------
    running = True

    while running:
        dt = clock.tick(FPS) / 1000.0

        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    running = False
                else:
                    handle_key(scene, e.key)
            elif e.type == pygame.DROPFILE:
                # 사진 고르기 = 창에 파일 끌어다 놓기
                logger.info("background photo selected: %s", e.file)
                scene.select_background(e.file)
            elif e.type == pygame.VIDEORESIZE:
                screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                logger.debug("window resized to %dx%d, restarting scene", e.w, e.h)
                scene.resize(Viewport.from_surface(screen))

        # 1) 시간 진행 + 배경 로딩 결과 확인
        scene.update(dt)

        # 2) 렌더링: 배경 → 눈송이 → HUD
        scene.draw(screen)
        draw_hud(screen, font, scene)

        pygame.display.flip()

    scene.close()
    pygame.quit()


if __name__ == "__main__":
    main()
