"""
modpacker - 모드팩 생성 및 설치 도구

- 모드 폴더와 modpack.yaml 비교 (추가/제거된 모드 감지)
- 전체/서버용 tar.gz 배포본 생성
- 배포본 설치 (Forge 버전별 1회 설치, 설치 레지스트리 관리)
"""

__version__ = "1.0.0"
