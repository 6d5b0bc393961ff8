"""
파일시스템 헬퍼
"""

import logging
import os
import shutil
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def current_umask() -> int:
    """현재 프로세스의 umask (os.umask는 설정과 동시에만 조회 가능)"""
    mask = os.umask(0)
    os.umask(mask)
    return mask


def published_mode(is_dir: bool = False) -> int:
    """mkstemp/mkdtemp로 만든 결과물에 적용할 일반 권한 (umask 반영)"""
    base = 0o777 if is_dir else 0o666
    return base & ~current_umask()


def remove_tree(path: Union[str, Path]) -> None:
    """
    임시 폴더를 삭제합니다.

    정리 실패는 경고로만 남기고 예외를 던지지 않으므로,
    finally 블록에서 호출해도 원래 오류를 가리지 않습니다.
    """
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"임시 폴더 정리 실패 ({path}): {e}")
