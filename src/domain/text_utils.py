"""テキスト正規化・数値範囲ユーティリティ"""

import re

_WHITESPACE = re.compile(r"\s+")
_HTML_TAG = re.compile(r"<[^>]+>")

MIN_RESULTS = 1
MAX_RESULTS = 10
DEFAULT_RESULTS = 5

MIN_COMMENTS = 100
MAX_COMMENTS = 300


def safe_text(value: object) -> str:
    """空白を1つにまとめて前後をトリム（None は空文字）"""
    if value is None:
        return ""
    return _WHITESPACE.sub(" ", str(value)).strip()


def strip_html(value: object) -> str:
    """HTMLタグを除去してから safe_text を適用"""
    if value is None:
        return ""
    return safe_text(_HTML_TAG.sub("", str(value)))


def clamp(value: float, lower: float, upper: float) -> float:
    return max(lower, min(upper, value))


def parse_int(value: object, default: int) -> int:
    """整数として解釈できなければ default"""
    if value is None:
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        return default


def clamp_max_results(value: object, default: int = DEFAULT_RESULTS) -> int:
    """検索結果数を [1, 10] に収める"""
    return int(clamp(parse_int(value, default), MIN_RESULTS, MAX_RESULTS))


def clamp_max_comments(value: object, default: int = MAX_COMMENTS) -> int:
    """コメント件数を [100, 300] に収める"""
    return int(clamp(parse_int(value, default), MIN_COMMENTS, MAX_COMMENTS))
