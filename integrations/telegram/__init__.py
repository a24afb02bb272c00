"""Клавиатуры и утилиты Telegram."""
