from typing import List, Optional

from sqlalchemy.orm import Session

from merchant_store.core.config import settings
from merchant_store.core.exceptions import InvalidRequestException, ResourceNotFoundException
from merchant_store.models.language import Language


class LanguageService:
    def __init__(self, db: Session):
        self.db = db

    def default_language(self) -> Language:
        """Configured default language, else the first one by sort order"""
        language = self.to_language(settings.DEFAULT_LANGUAGE)
        if language:
            return language
        language = self.db.query(Language).order_by(Language.sort_order, Language.id).first()
        if not language:
            raise ResourceNotFoundException("No language configured")
        return language

    def to_language(self, code: Optional[str]) -> Optional[Language]:
        if not code:
            return None
        return self.db.query(Language).filter(Language.code == code.lower()).first()

    def get_languages(self, codes: List[str]) -> List[Language]:
        """Resolve language codes, all of them must exist"""
        languages = []
        for code in codes:
            language = self.to_language(code)
            if not language:
                raise InvalidRequestException(f"Language {code} is not supported")
            if language not in languages:
                languages.append(language)
        return languages
