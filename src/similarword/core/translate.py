# src/similarword/core/translate.py
"""
External meaning lookup for dictionary words.

A Translator turns a word into a short gloss in the target language.
Lookups are best-effort: a provider may return None or raise
TranslationFailure, and callers treat both as "no annotation".
"""

import hashlib
import logging
import random
from abc import ABC, abstractmethod

import httpx
from openai import OpenAI, OpenAIError

from similarword.core.config import Settings


logger = logging.getLogger(__name__)


class TranslationFailure(Exception):
    """A single lookup failed."""


class Translator(ABC):
    name: str = "base"

    @abstractmethod
    def translate(self, word: str) -> str | None:
        ...


BAIDU_URL = "https://fanyi-api.baidu.com/api/trans/vip/translate"


class BaiduTranslator(Translator):
    """Baidu general translation API. Needs an app id and secret key."""

    name = "baidu"

    def __init__(
        self,
        appid: str,
        key: str,
        source_lang: str = "en",
        target_lang: str = "zh",
        client: httpx.Client | None = None,
        timeout: float = 10.0,
    ):
        self.appid = appid
        self.key = key
        self.source_lang = source_lang
        self.target_lang = target_lang
        self.client = client or httpx.Client(timeout=timeout)

    def sign(self, word: str, salt: str) -> str:
        raw = f"{self.appid}{word}{salt}{self.key}"
        return hashlib.md5(raw.encode("utf-8")).hexdigest()

    def translate(self, word: str) -> str | None:
        salt = str(random.randint(10000, 99999))
        params = {
            "q": word,
            "from": self.source_lang,
            "to": self.target_lang,
            "appid": self.appid,
            "salt": salt,
            "sign": self.sign(word, salt),
        }

        try:
            r = self.client.get(BAIDU_URL, params=params)
            r.raise_for_status()
            data = r.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TranslationFailure(f"{word}: {e}") from e

        if "error_code" in data:
            raise TranslationFailure(f"{word}: {data['error_code']} {data.get('error_msg', '')}")

        results = data.get("trans_result") or []
        if not results:
            return None
        return results[0].get("dst")


SYSTEM_PROMPT = """You are a bilingual dictionary.

Give the meaning of an English word in the requested language.
Reply with ONLY the meaning, several senses separated by semicolons (under 10 words).

Examples:
- "猫；猫科动物"
- "高兴的；乐意的"
"""


def build_prompt(word: str, target_lang: str) -> str:
    return f"Meaning of '{word}' in language '{target_lang}':"


class OpenAITranslator(Translator):
    name = "openai"

    def __init__(
        self,
        client: OpenAI | None = None,
        model: str = "gpt-4o-mini",
        target_lang: str = "zh",
        timeout: float = 10.0,
    ):
        self.client = client or OpenAI(timeout=timeout)
        self.model = model
        self.target_lang = target_lang

    def translate(self, word: str) -> str | None:
        try:
            response = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": build_prompt(word, self.target_lang)},
                ],
            )
        except OpenAIError as e:
            raise TranslationFailure(f"{word}: {e}") from e

        content = response.choices[0].message.content
        if not content or not content.strip():
            return None
        return content.strip()


def get_translator(settings: Settings) -> Translator | None:
    """Build the configured translator, or None if there isn't one."""
    choice = settings.TRANSLATOR.lower()

    if choice == "none":
        return None

    if choice == "baidu":
        if not settings.BAIDU_APPID or not settings.BAIDU_KEY:
            logger.warning("Baidu translator selected but credentials are missing")
            return None
        translator = BaiduTranslator(
            appid=settings.BAIDU_APPID,
            key=settings.BAIDU_KEY,
            source_lang=settings.TRANSLATE_FROM,
            target_lang=settings.TRANSLATE_TO,
            timeout=settings.TRANSLATE_TIMEOUT,
        )
    elif choice == "openai":
        translator = OpenAITranslator(
            model=settings.OPENAI_MODEL,
            target_lang=settings.TRANSLATE_TO,
            timeout=settings.TRANSLATE_TIMEOUT,
        )
    else:
        raise ValueError(f"Unknown translator: {settings.TRANSLATOR}")

    logger.info("Using %s translator (timeout %ss)", translator.name, settings.TRANSLATE_TIMEOUT)
    return translator
