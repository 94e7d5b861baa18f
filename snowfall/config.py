# snowfall/config.py

# FPS
FPS = 60

# 창 기본 크기 (세로 화면 느낌)
SCREEN_WIDTH = 400
SCREEN_HEIGHT = 800
WINDOW_TITLE = "Snowfall"

# 눈송이 경로 관련
MARGIN = 50.0                  # 화면 위/아래로 이만큼 더 지나가야 자연스럽게 들어오고 나감
JITTER = 3.0                   # 프레임마다 x축으로 흔들리는 폭 (+- 픽셀)

SCALE_RANGE = (0.5, 1.5)       # 눈송이 크기 배율
OPACITY_RANGE = (0.1, 1.0)     # 눈송이 투명도

# 기본값 (설정 가능한 버전)
DEFAULT_FLAKE_COUNT = 100
DEFAULT_AVERAGE_DURATION = 5.0  # 위에서 아래까지 떨어지는 데 걸리는 시간 (초)

# UI에서 허용하는 범위 (코어는 이 범위를 강제하지 않음)
FLAKE_COUNT_RANGE = (10, 300)
AVERAGE_DURATION_RANGE = (1.0, 10.0)

# 키보드 조절 단위
FLAKE_COUNT_STEP = 10
AVERAGE_DURATION_STEP = 0.5

# 클래식 버전: 개수 고정, 속도 2~5초, x는 대충 화면 폭 범위
CLASSIC_FLAKE_COUNT = 50
CLASSIC_DURATION_RANGE = (2.0, 5.0)
CLASSIC_X_RANGE = (-20.0, 400.0)

# 렌더링
BACKGROUND_COLOR = (0, 0, 0)    # 하얀 눈이 잘 보이게 검은 배경
SNOWFLAKE_COLOR = (255, 255, 255)
SNOWFLAKE_SIZE = 30             # 기본 스프라이트 크기 (scale 1.0 기준)
HUD_COLOR = (200, 200, 200)
HUD_FONT_SIZE = 18

# 시간 비교할 때 float 오차 허용 범위
CYCLE_EPSILON = 1e-9


def clamp(value, lo, hi):
    """
    UI 쪽에서 슬라이더 범위 맞출 때 쓰는 헬퍼.
    """
    return max(lo, min(hi, value))
