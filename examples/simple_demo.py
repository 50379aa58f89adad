#!/usr/bin/env python3  # noqa: EXE001
"""
Minimal demonstration of newsgen

Asks a model for a list of headlines and gets validated pydantic objects
back, whatever prose or code fences the model wraps them in.

Needs NEWSGEN_OPENROUTER_API_KEY (or NEWSGEN_PROVIDER=gemini and
NEWSGEN_GEMINI_API_KEY) in the environment or a .env file.
"""  # noqa: D212, D415

import asyncio
import logging
from pathlib import Path

from pydantic import BaseModel

from newsgen import ParsingError, Prompt, build_generator, load_settings


class Headline(BaseModel):
    title: str
    category: str


async def main():  # noqa: ANN201, D103
    logging.basicConfig(level=logging.INFO)
    print("📰 newsgen - structured generation demo\n")

    generator = build_generator(
        load_settings(env_file=".env" if Path(".env").exists() else None)
    )
    prompt = Prompt(
        "Write three fictional news headlines as a JSON array of objects "
        'with "title" and "category" fields.',
        list[Headline],
    )

    try:
        headlines = await generator.generate_content(prompt)
    except ParsingError as e:
        print(f"❌ No usable answer after {e.attempts} attempt(s): {e}")
        return

    print("📝 Results:")
    for i, headline in enumerate(headlines, 1):
        print(f"{i}. [{headline.category}] {headline.title}")


if __name__ == "__main__":
    asyncio.run(main())
