"""ベースCRUDクラス

全てのCRUD操作の基底クラスを提供
"""

from typing import Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from linkshelf.models.base import Base
from linkshelf.utils.error_handler import handle_db_operation

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """ベースCRUDクラス

    基本的なCRUD操作を提供
    すべてのCRUDクラスはこのクラスを継承する

    コミットは行わない（トランザクション境界は呼び出し側が管理する）
    """

    def __init__(self, model: type[ModelType]):
        """Args:

        model: SQLAlchemyモデルクラス
        """
        self.model = model

    @handle_db_operation("レコード取得")
    async def get(self, db: AsyncSession, id: int) -> ModelType | None:
        """IDでレコードを取得

        Args:
            db: データベースセッション
            id: レコードID

        Returns:
            見つかった場合はモデルインスタンス、見つからない場合はNone
        """
        stmt = select(self.model).where(self.model.id == id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @handle_db_operation("レコード数取得")
    async def count(self, db: AsyncSession) -> int:
        """総レコード数を取得

        Args:
            db: データベースセッション

        Returns:
            総レコード数
        """
        stmt = select(func.count(self.model.id))
        result = await db.execute(stmt)
        return result.scalar() or 0
