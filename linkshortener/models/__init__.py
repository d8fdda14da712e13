from linkshortener.models.short_url_model import ShortURLModel, LinkStatus
from linkshortener.models.user_model import UserModel


__all__ = [
    'ShortURLModel',
    'LinkStatus',
    'UserModel',
]
