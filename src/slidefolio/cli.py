"""Command-line interface for slidefolio."""

import argparse
import asyncio
import logging
import shutil
import sys
import tempfile
from pathlib import Path

from .config import Config
from .models import Folder, PickedFile
from .rich_text import join_segments
from .selection import picked_from_path
from .sentence_colors import assign_sentence_colors
from .service import SlideLibrary


def parse_arguments(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog='slidefolio',
        description='Build slide folders from a spreadsheet and image files.'
    )
    parser.add_argument(
        '--config',
        default=None,
        help='Path to configuration file (default: built-in defaults)'
    )

    subparsers = parser.add_subparsers(dest='command', required=True)

    upload = subparsers.add_parser('upload', help='Create a folder from picked files')
    upload.add_argument('files', nargs='+', help='Spreadsheet (.csv/.xlsx) and image files')
    upload.add_argument('--keep-sources', action='store_true',
                        help='Ingest copies of the files instead of the originals')

    add = subparsers.add_parser('add', help='Add picked files to an existing folder')
    add.add_argument('folder_id', type=int)
    add.add_argument('files', nargs='+')
    add.add_argument('--name', help='Rename the folder at the same time')
    add.add_argument('--keep-sources', action='store_true',
                     help='Ingest copies of the files instead of the originals')

    subparsers.add_parser('list', help='List folders')

    show = subparsers.add_parser('show', help='Show the slides of a folder')
    show.add_argument('folder_id', type=int)

    rename = subparsers.add_parser('rename', help='Rename a folder')
    rename.add_argument('folder_id', type=int)
    rename.add_argument('name')

    delete = subparsers.add_parser('delete', help='Delete a folder and its managed images')
    delete.add_argument('folder_id', type=int)

    return parser.parse_args(argv)


def _print_progress(percent: float) -> None:
    print(f"\r  Ingesting images... {percent:5.1f}%", end='', flush=True)
    if percent >= 100:
        print()


def _print_folder(folder: Folder) -> None:
    print(f"[{folder.id}] {folder.folder_name} ({len(folder.images)} slides)")
    for number, entry in enumerate(folder.images, start=1):
        image = entry.image_url or '-'
        print(f"  {number:3d}. {entry.name}  image: {image}")
        text = join_segments(entry.description)
        if text:
            print(f"       text:  {text}")
        highlighted = [
            f"{item.segment.text.strip()}={item.color}"
            for item in assign_sentence_colors(entry.description)
            if item.color
        ]
        if highlighted:
            print(f"       sentences: {', '.join(highlighted)}")
        if entry.voice_text:
            print(f"       voice: {entry.voice_text}")


async def _stage_copies(paths: list[str], keep_sources: bool, staging: Path) -> list[PickedFile]:
    """Picked files for the given paths; copies them into staging first when sources must survive.

    Each copy gets its own subdirectory so inputs sharing a basename do not collide.
    """
    if not keep_sources:
        return [picked_from_path(p) for p in paths]

    picked = []
    for index, p in enumerate(paths):
        slot = staging / str(index)
        await asyncio.to_thread(slot.mkdir)
        target = slot / Path(p).name
        await asyncio.to_thread(shutil.copyfile, p, target)
        picked.append(picked_from_path(target))
    return picked


async def run(args: argparse.Namespace, config: Config) -> int:
    """Execute one command against the configured library."""
    library = SlideLibrary.from_config(config)
    store = library.store
    await store.load()

    if args.command == 'upload':
        with tempfile.TemporaryDirectory(prefix='slidefolio_pick_') as staging:
            files = await _stage_copies(args.files, args.keep_sources, Path(staging))
            outcome = await library.upload_folder(files, on_progress=_print_progress)
        print(outcome.message)
        if outcome.folder:
            _print_folder(outcome.folder)
        return 0 if outcome.success else 1

    if args.command == 'add':
        with tempfile.TemporaryDirectory(prefix='slidefolio_pick_') as staging:
            files = await _stage_copies(args.files, args.keep_sources, Path(staging))
            outcome = await library.add_content(args.folder_id, files, folder_name=args.name,
                                                on_progress=_print_progress)
        print(outcome.message)
        return 0 if outcome.success else 1

    if args.command == 'list':
        if not store.folders:
            print("No folders yet.")
        for folder in store.folders:
            print(f"[{folder.id}] {folder.folder_name} ({len(folder.images)} slides)")
        print(f"{len(library.storage.list_files())} image file(s) in {library.storage.root}")
        return 0

    folder = store.get(args.folder_id)
    if folder is None:
        print(f"Error: folder {args.folder_id} not found.")
        return 1

    if args.command == 'show':
        _print_folder(folder)
    elif args.command == 'rename':
        await store.rename(folder.id, args.name)
        print(f"Renamed folder {folder.id} to '{args.name}'.")
    elif args.command == 'delete':
        await store.delete(folder.id)
        print(f"Deleted folder {folder.id}.")

    if store.dirty:
        print("Warning: changes could not be saved.")
        return 1
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    args = parse_arguments(argv)

    try:
        config = Config(args.config) if args.config else Config()
    except FileNotFoundError as e:
        print(f"Error: {e}")
        return 1

    try:
        return asyncio.run(run(args, config))
    except Exception as e:
        logging.exception("Command failed")
        print(f"\nError: {e}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
