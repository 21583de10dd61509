from datetime import date
from typing import List, Optional, Tuple

# 7월부터 새 학년도 1학기 시작
NEW_YEAR_MONTH = 7


def default_period(today: Optional[date] = None) -> Tuple[str, str]:
    """오늘 기준 기본 (학년도, 학기). 예: 2024-08-01 → ("2024/2025", "1")"""
    today = today or date.today()
    if today.month >= NEW_YEAR_MONTH:
        return f"{today.year}/{today.year + 1}", "1"
    return f"{today.year - 1}/{today.year}", "2"


def academic_year_options(today: Optional[date] = None) -> List[str]:
    """선택 목록용 학년도 4개 (올해-2 ~ 올해+1)"""
    today = today or date.today()
    return [f"{y}/{y + 1}" for y in range(today.year - 2, today.year + 2)]
