# snowfall/errors.py


class SnowfallError(Exception):
    """눈 내리는 씬에서 발생하는 에러의 공통 부모."""


class InvalidConfig(SnowfallError, ValueError):
    """
    파티클 설정이 잘못된 경우 (개수 < 0, 지속시간 <= 0 등).
    씬 빌드가 바로 중단되고 호출한 쪽으로 그대로 올라간다.
    """


class ImageDecodeFailure(SnowfallError):
    """
    배경 이미지를 읽거나 디코딩하지 못한 경우.
    SceneComposer가 받아서 기존 배경을 유지한다 (사용자에게는 안 보임).
    """
