"""Allow ``python -m image_translator``."""

from image_translator.main import run

run()
