#!/usr/bin/env python3
"""
Command-line interface for AI Creative Studio.
"""

import argparse
import sys
import webbrowser

from dotenv import load_dotenv

from creative_studio.catalog import EXAMPLE_PROMPTS, get_example
from creative_studio.config import StudioSettings
from creative_studio.io.export import ARCHIVE_FILENAME, ArtifactManager
from creative_studio.models import ProjectType
from creative_studio.orchestration import StudioController, get_state_summary

# Load environment variables
load_dotenv()


def _controller() -> StudioController:
    return StudioController.from_settings(StudioSettings.from_env(dotenv=False))


def cmd_generate(args):
    """Generate a project from a prompt or a built-in example."""
    controller = _controller()

    try:
        if args.example:
            try:
                example = get_example(args.example)
            except ValueError as e:
                print(f"❌ Error: {e}")
                return 1
            controller.select_example(example)
            print(f"{example.icon} Example: {example.title}")
        elif args.prompt:
            controller.set_prompt(args.prompt)

        if args.type:
            controller.set_project_type(ProjectType(args.type))

        print(f"🎨 Project type: {controller.state.project_type.value}")
        print(f"🤖 Using {controller.client.model_name}")
        print("🚀 Generating code...")

        notice = controller.submit_prompt()
        if notice is None or notice.is_error:
            message = notice.message if notice else "Generation was discarded"
            print(f"❌ {message}")
            if controller.state.panels.settings_visible:
                print("🔑 Set a key with: python cli.py set-key <KEY> (or GROQ_API_KEY in .env)")
            return 1

        print(f"✅ {notice.message}")

        artifact_manager = ArtifactManager(args.output)
        html_path = artifact_manager.save_html(controller.state.generated_code)
        print(f"📄 HTML: {html_path}")

        download = controller.download_archive(artifact_manager.save_archive)
        if download.is_error:
            print(f"❌ {download.message}")
            return 1
        print(f"📦 Archive: {artifact_manager.output_dir / ARCHIVE_FILENAME}")

        generated = controller.state.last_generation
        if generated and generated.total_tokens is not None:
            print(
                f"📊 Tokens: {generated.prompt_tokens} prompt, "
                f"{generated.completion_tokens} completion"
            )

        if args.open:
            webbrowser.open(html_path.resolve().as_uri())

        return 0
    finally:
        controller.close()


def cmd_examples(args):
    """List the built-in example prompts."""
    for example in EXAMPLE_PROMPTS:
        if args.type and example.project_type.value != args.type:
            continue
        print(f"{example.icon} {example.title} [{example.project_type.value}]")
        print(f"   {example.description}")
        if args.verbose:
            print(f"   Prompt: {example.prompt}")
        print()
    return 0


def cmd_set_key(args):
    """Persist the API key used for generation."""
    controller = _controller()
    try:
        notice = controller.save_credential(args.key)
    finally:
        controller.close()

    if notice.is_error:
        print(f"❌ {notice.message}")
        return 1
    print(f"✅ {notice.message}")
    return 0


def cmd_clear(args):
    """Forget the saved prompt."""
    controller = _controller()
    try:
        controller.clear()
    finally:
        controller.close()
    print("🧹 Cleared saved prompt")
    return 0


def cmd_status(args):
    """Show what the studio would start with."""
    controller = _controller()
    try:
        print(get_state_summary(controller.state))
        if controller.state.prompt_text:
            print(f"Last prompt: {controller.state.prompt_text}")
    finally:
        controller.close()
    return 0


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Generate games and websites with AI",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    types = [t.value for t in ProjectType]

    # Generate command
    gen_parser = subparsers.add_parser("generate", help="Generate a project from a prompt")
    source = gen_parser.add_mutually_exclusive_group()
    source.add_argument("--prompt", "-p", help="Project description (default: last saved prompt)")
    source.add_argument("--example", "-e", help="Title of a built-in example prompt")
    gen_parser.add_argument("--type", "-t", choices=types, help="Project type")
    gen_parser.add_argument("--output", "-o", default="outputs", help="Output directory")
    gen_parser.add_argument("--open", action="store_true", help="Open the result in a browser")

    # Examples command
    ex_parser = subparsers.add_parser("examples", help="List example prompts")
    ex_parser.add_argument("--type", "-t", choices=types, help="Only show this project type")
    ex_parser.add_argument("--verbose", "-v", action="store_true", help="Show full prompts")

    # Set-key command
    key_parser = subparsers.add_parser("set-key", help="Save the Groq API key")
    key_parser.add_argument("key", help="API key")

    subparsers.add_parser("clear", help="Forget the saved prompt")
    subparsers.add_parser("status", help="Show saved settings")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.command == "generate":
            return cmd_generate(args)
        elif args.command == "examples":
            return cmd_examples(args)
        elif args.command == "set-key":
            return cmd_set_key(args)
        elif args.command == "clear":
            return cmd_clear(args)
        elif args.command == "status":
            return cmd_status(args)
    except KeyboardInterrupt:
        print("\n\n⚠️  Interrupted by user")
        return 130
    except Exception as e:
        print(f"\n❌ Error: {str(e)}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
