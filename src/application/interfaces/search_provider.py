"""検索プロバイダインターフェース"""

from typing import Protocol

from src.domain.entities import NormalizedResultItem, SearchCredentials, SearchSource


class SearchProvider(Protocol):
    """1つの外部検索APIに対するアダプタ"""

    source: SearchSource

    def search(
        self,
        query: str,
        limit: int,
        credentials: SearchCredentials,
    ) -> list[NormalizedResultItem]:
        """
        外部APIを検索して正規化済みアイテムを返す

        Args:
            query: 検索クエリ
            limit: 取得件数（外部APIの上限で頭打ち）
            credentials: 呼び出し時点の認証情報

        Returns:
            正規化済みアイテムのリスト（認証情報未設定なら空リスト）

        Raises:
            UpstreamTransportError: 外部APIが非2xxを返した・タイムアウト
        """
        ...
