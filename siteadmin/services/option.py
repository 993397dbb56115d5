import logging
from datetime import datetime
from typing import Dict, List, Optional
from sqlmodel import Session, select

from siteadmin.models.option import Option, OptionGroup

logger = logging.getLogger(__name__)


class OptionService:
    def __init__(self, session: Session):
        self.session = session

    def get_options(self, keys: Optional[List[str]] = None, include_private: bool = False) -> Dict[str, str]:
        """Options as a ``{key: value}`` map; private options only when asked for."""
        query = select(Option)
        if keys:
            query = query.where(Option.key.in_(keys))
        if not include_private:
            query = query.where(Option.is_public == True)  # noqa: E712

        return {option.key: option.value or "" for option in self.session.exec(query).all()}

    def list_options(self, group: Optional[OptionGroup] = None) -> List[Option]:
        query = select(Option).order_by(Option.group, Option.key)
        if group:
            query = query.where(Option.group == group)
        return self.session.exec(query).all()

    def _upsert(self, key: str, value: str) -> Option:
        option = self.session.exec(select(Option).where(Option.key == key)).first()
        if option:
            option.value = value
            option.updated_at = datetime.utcnow()
        else:
            option = Option(key=key, value=value)
        self.session.add(option)
        return option

    def update_option(self, key: str, value: str) -> Option:
        option = self._upsert(key, value)
        self.session.commit()
        self.session.refresh(option)
        logger.info("Updated option %s", key)
        return option

    def update_options(self, values: Dict[str, str]) -> int:
        for key, value in values.items():
            self._upsert(key, value)
        self.session.commit()
        logger.info("Updated %d options", len(values))
        return len(values)

    def seed_option(
        self,
        key: str,
        value: str,
        group: OptionGroup = OptionGroup.GENERAL,
        type: str = "string",
        is_public: bool = False,
        description: Optional[str] = None,
    ) -> Option:
        """Create or refresh an option with its metadata."""
        option = self._upsert(key, value)
        option.group = group
        option.type = type
        option.is_public = is_public
        option.description = description
        self.session.commit()
        self.session.refresh(option)
        return option
