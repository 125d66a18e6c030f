"""OCR.space 画像テキスト抽出クライアント"""

import httpx

from src.domain.exceptions import ConfigurationError, UpstreamTransportError
from src.domain.text_utils import safe_text
from src.infrastructure.logging_config import get_logger, trace_tool

logger = get_logger(__name__)

DEFAULT_URL = "https://api.ocr.space/parse/image"


class OcrSpaceClient:
    """
    OCR.space の parse/image API をそのまま中継

    言語・エンジンは固定（デフォルト: 韓国語 / Engine 2）
    """

    def __init__(
        self,
        api_key: str | None,
        url: str = DEFAULT_URL,
        language: str = "kor",
        engine: int = 2,
        timeout_sec: float = 30.0,
    ):
        self.api_key = api_key
        self.url = url
        self.language = language
        self.engine = engine
        self.timeout_sec = timeout_sec

    @trace_tool(name="ocr_extract_text")
    def extract_text(self, image_url: str) -> str:
        """
        画像URLからテキストを抽出（空白を正規化して返す）

        Raises:
            ConfigurationError: APIキー未設定
            UpstreamTransportError: API呼び出しエラー
        """
        if not self.api_key:
            raise ConfigurationError("OCR API key missing")

        logger.info(f"[OCR] 抽出開始: {image_url}")
        form = {
            "apikey": self.api_key,
            "url": image_url,
            "language": self.language,
            "OCREngine": str(self.engine),
            "scale": "true",
            "isOverlayRequired": "false",
        }

        try:
            with httpx.Client(timeout=self.timeout_sec) as client:
                response = client.post(self.url, data=form)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error(f"[OCR] API エラー: {e}")
            raise UpstreamTransportError("OCR API failed") from e

        data = response.json() or {}
        parsed = data.get("ParsedResults") or [{}]
        text = safe_text((parsed[0] or {}).get("ParsedText"))
        logger.info(f"[OCR] 抽出完了: {len(text)}文字")
        return text
