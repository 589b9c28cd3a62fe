"""Search for an app, analyze it, then chat about it from the terminal."""

import sys
import asyncio
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from appscout.core.gemini_client import GeminiClient
from appscout.models.app_schema import ChatMessage
from appscout.services.analysis_service import AnalysisService
from appscout.services.chat_service import ChatService
from appscout.services.search_service import SearchService
from appscout.utils.logger import setup_logger
from config.settings import settings


def print_analysis(app, analysis):
    print(f"\n{'='*70}")
    print(f"{app.name} by {app.developer}")
    print(f"{'='*70}")
    print(f"Rating:        {analysis.rating}")
    print(f"Downloads:     {analysis.downloads}")
    print(f"Last updated:  {analysis.last_updated or 'Unknown'}")
    print(f"\nReviews:\n  {analysis.review_summary}")
    print(f"\nAuthenticity:\n  {analysis.authenticity}")
    print(f"\nDeveloper:\n  {analysis.background}")
    if analysis.grounding_urls:
        print("\nSources:")
        for idx, url in enumerate(analysis.grounding_urls, 1):
            print(f"  [{idx}] {url}")
    print(f"{'='*70}\n")


async def run(query: str, pick: int = None, chat: bool = True):
    client = GeminiClient()

    results = await SearchService(client).search_apps(query)
    if not results:
        print("No apps found.")
        return

    for idx, app in enumerate(results, 1):
        print(f"[{idx}] {app.name} ({app.developer}) - {app.rating}")
        if app.description:
            print(f"    {app.description}")

    if pick is None:
        choice = input(f"\nPick an app [1-{len(results)}]: ").strip()
        pick = int(choice) if choice.isdigit() else 1
    app = results[max(1, min(pick, len(results))) - 1]

    analysis = await AnalysisService(client).analyze_app(app)
    print_analysis(app, analysis)

    if not chat:
        return

    chat_service = ChatService(client)
    history = []
    print("Ask about this app (empty line or 'exit' to quit).")
    while True:
        message = input("> ").strip()
        if not message or message.lower() == "exit":
            break
        reply = await chat_service.chat_with_app(history, message, app, analysis)
        print(f"\n{reply}\n")
        history.append(ChatMessage(role="user", content=message))
        history.append(ChatMessage(role="model", content=reply))


def main():
    import argparse

    parser = argparse.ArgumentParser(description="Find, analyze and chat about a Play Store app")
    parser.add_argument("--query", required=True, help="What kind of app to look for")
    parser.add_argument("--pick", type=int, default=None, help="Result number to analyze (skips the prompt)")
    parser.add_argument("--no-chat", action="store_true", help="Stop after the analysis")

    args = parser.parse_args()

    settings.validate()
    settings.ensure_directories()
    setup_logger("appscout", log_dir=settings.LOG_DIR, level=settings.LOG_LEVEL)

    asyncio.run(run(args.query, pick=args.pick, chat=not args.no_chat))


if __name__ == "__main__":
    main()
