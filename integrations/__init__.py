"""
Интеграции с внешними сервисами.

- telegram/ — клавиатуры Telegram
"""

from .telegram import keyboards

__all__ = ['keyboards']
