"""画像テキスト抽出インターフェース"""

from typing import Protocol


class TextExtractor(Protocol):
    """画像URLからテキストを抽出するOCRサービス"""

    def extract_text(self, image_url: str) -> str:
        ...
