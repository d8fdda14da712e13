from linkshortener.dao.base.short_url_base_dao import ShortURLBaseDAO
from linkshortener.dao.base.user_base_dao import UserBaseDAO


__all__ = [
    'ShortURLBaseDAO',
    'UserBaseDAO',
]
