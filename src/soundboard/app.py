#!/usr/bin/env python3
"""
Soundboard

Command line front end for the soundboard: manage the sound library,
import or record clips and play them back.

Usage:
    soundboard list
    soundboard add "Laugh" laugh.mp3 --color yellow
    soundboard play <id or position> --wait
    soundboard record "Hello" --seconds 3
"""

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import pygame

from .audio_system import AudioAssets, AudioRecorder, MockPlaybackController, PlaybackController
from .config import SoundboardConfig, default_config
from .library_system import ColorAppearance, SoundLibrary, SoundRecord
from .sound_editor import SoundEditor
from .utils import ClassLogger, HybridLogger


# Seconds to wait for the library to load or save before giving up
IO_TIMEOUT = 10.0


@dataclass
class SoundboardSystem:
    """All soundboard components wired to one storage directory"""
    config: SoundboardConfig
    library: SoundLibrary
    assets: AudioAssets
    recorder: AudioRecorder
    player: Optional[Union[PlaybackController, MockPlaybackController]] = None

    def editor(self, logger: ClassLogger, sound_to_edit: Optional[SoundRecord] = None) -> SoundEditor:
        return SoundEditor(self.assets, logger, sound_to_edit=sound_to_edit)

    def close(self) -> None:
        if self.player is not None:
            self.player.shutdown()
        self.library.close(IO_TIMEOUT)


def create_soundboard_system(config: SoundboardConfig, hybrid_logger: HybridLogger,
                             with_playback: bool = True) -> SoundboardSystem:
    """
    Create and wire the soundboard components.

    Args:
        config: SoundboardConfig instance
        hybrid_logger: Logger factory for per-component loggers
        with_playback: Open the audio output (skipped for library-only commands)

    Returns:
        SoundboardSystem with the library already loading in the background
    """
    config.validate()
    config.storage_dir.mkdir(parents=True, exist_ok=True)

    level = config.log_level
    library = SoundLibrary(
        storage_dir=config.storage_dir,
        logger=hybrid_logger.get_class_logger("SoundLibrary", level),
        library_file_name=config.library_file_name,
    )
    assets = AudioAssets(config.storage_dir, hybrid_logger.get_class_logger("AudioAssets", level))
    recorder = AudioRecorder(
        config.recording, assets, hybrid_logger.get_class_logger("AudioRecorder", level)
    )

    player = None
    if with_playback:
        player_logger = hybrid_logger.get_class_logger("PlaybackController", level)
        if config.use_mock_audio:
            player = MockPlaybackController(config.storage_dir, player_logger)
        else:
            player = PlaybackController(config.storage_dir, player_logger)

    return SoundboardSystem(
        config=config, library=library, assets=assets, recorder=recorder, player=player
    )


# ============================================================================
# COMMANDS
# ============================================================================

def find_sound(library: SoundLibrary, target: str) -> Optional[SoundRecord]:
    """Look a sound up by id, or by position when target is a number"""
    sound = library.get(target)
    if sound is not None:
        return sound
    if target.isdigit():
        sounds = library.current_sequence()
        position = int(target)
        if position < len(sounds):
            return sounds[position]
    return None


def cmd_list(system: SoundboardSystem, args, logger: ClassLogger) -> int:
    sounds = system.library.current_sequence()
    if not sounds:
        print("No sounds yet. Add one with: soundboard add NAME FILE")
        return 0

    for position, sound in enumerate(sounds):
        if isinstance(sound.appearance, ColorAppearance):
            look = sound.appearance.color.hex()
        else:
            look = "image" if sound.appearance.image_data else "default glyph"
        missing = "" if system.assets.exists(sound.audio_file_name) else "  ❌ audio missing"
        print(f"{position:3d}  {sound.id}  {sound.name:<24} {look:<10} {sound.audio_file_name}{missing}")
    return 0


def cmd_add(system: SoundboardSystem, args, logger: ClassLogger) -> int:
    editor = system.editor(logger)
    editor.name = args.name or ""
    if args.color:
        editor.set_color(args.color)
    editor.import_file(args.file)
    sound = editor.commit(system.library)
    print(f'✅ Added "{sound.name}" ({sound.id})')
    return 0


def cmd_edit(system: SoundboardSystem, args, logger: ClassLogger) -> int:
    sound = find_sound(system.library, args.target)
    if sound is None:
        print(f"❌ Sound not found: {args.target}")
        return 1

    editor = system.editor(logger, sound_to_edit=sound)
    if args.name is not None:
        editor.name = args.name
    if args.color:
        editor.set_color(args.color)
    if args.file:
        editor.import_file(args.file)
    updated = editor.commit(system.library)
    print(f'✅ Updated "{updated.name}" ({updated.id})')
    return 0


def cmd_remove(system: SoundboardSystem, args, logger: ClassLogger) -> int:
    if args.position is not None:
        try:
            removed = system.library.remove_at(args.position)
        except IndexError as e:
            print(f"❌ {e}")
            return 1
        print(f'🗑️ Removed "{removed.name}"')
        return 0

    if not args.target:
        print("❌ Give a sound id or --position")
        return 1
    if system.library.remove(args.target):
        print(f"🗑️ Removed {args.target}")
    else:
        print(f"Nothing to remove for {args.target}")
    return 0


def cmd_play(system: SoundboardSystem, args, logger: ClassLogger) -> int:
    sound = find_sound(system.library, args.target)
    if sound is None:
        print(f"❌ Sound not found: {args.target}")
        return 1

    if not system.player.play(sound):
        print(f'❌ Could not play "{sound.name}"')
        return 1

    print(f'🔊 Playing "{sound.name}"')
    if args.wait:
        system.player.wait_until_finished()
    return 0


def cmd_record(system: SoundboardSystem, args, logger: ClassLogger) -> int:
    print(f"🎙️ Recording for {args.seconds:.1f}s...")
    recording = system.recorder.record_for(args.seconds)
    if recording is None:
        print("❌ Nothing was recorded")
        return 1

    editor = system.editor(logger)
    editor.name = args.name
    if args.color:
        editor.set_color(args.color)
    editor.attach_recording(recording)
    sound = editor.commit(system.library)
    print(f'✅ Recorded "{sound.name}" ({sound.id})')
    return 0


COMMANDS = {
    "list": (cmd_list, False),
    "add": (cmd_add, False),
    "edit": (cmd_edit, False),
    "remove": (cmd_remove, False),
    "play": (cmd_play, True),
    "record": (cmd_record, False),
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="soundboard",
        description="Record, import and play short sounds",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    parser.add_argument(
        '--storage-dir',
        type=Path,
        help='Directory holding sounds.json and the audio files (default: $SOUNDBOARD_HOME or ~/.soundboard)'
    )
    parser.add_argument(
        '--mock-audio',
        action='store_true',
        help='Do not open the audio device'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Show log output'
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List sounds in display order")

    add_parser = subparsers.add_parser("add", help="Import an audio file as a new sound")
    add_parser.add_argument("name", help="Display name (empty to use the file's title tag)")
    add_parser.add_argument("file", type=Path, help="Audio file to import")
    add_parser.add_argument("--color", help="Tile color name or hex (default: red)")

    edit_parser = subparsers.add_parser("edit", help="Change a sound")
    edit_parser.add_argument("target", help="Sound id or position")
    edit_parser.add_argument("--name", help="New display name")
    edit_parser.add_argument("--color", help="New tile color")
    edit_parser.add_argument("--file", type=Path, help="Replace the audio with this file")

    remove_parser = subparsers.add_parser("remove", help="Remove a sound")
    remove_parser.add_argument("target", nargs="?", help="Sound id")
    remove_parser.add_argument("--position", type=int, help="Remove by position instead")

    play_parser = subparsers.add_parser("play", help="Play a sound")
    play_parser.add_argument("target", help="Sound id or position")
    play_parser.add_argument("--wait", action="store_true", help="Wait until playback ends")

    record_parser = subparsers.add_parser("record", help="Record a new sound from the microphone")
    record_parser.add_argument("name", help="Display name")
    record_parser.add_argument("--seconds", type=float, default=3.0, help="Recording length (default: 3)")
    record_parser.add_argument("--color", help="Tile color name or hex (default: red)")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)

    config = default_config(storage_dir=args.storage_dir, use_mock_audio=args.mock_audio)
    config.log_level = logging.DEBUG if args.verbose else logging.WARNING

    hybrid_logger = HybridLogger("soundboard", log_dir=config.log_dir)
    logger = hybrid_logger.get_main_logger(config.log_level)

    command, needs_playback = COMMANDS[args.command]
    system = None
    try:
        system = create_soundboard_system(config, hybrid_logger, with_playback=needs_playback)
        if not system.library.wait_until_loaded(IO_TIMEOUT):
            print("❌ Timed out loading the sound library")
            return 1
        return command(system, args, logger)
    except (ValueError, OSError, pygame.error) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"❌ {e}")
        return 1
    except KeyboardInterrupt:
        print("\n⏹️  Stopped by user")
        return 1
    finally:
        if system is not None:
            system.close()
        hybrid_logger.cleanup()


if __name__ == "__main__":
    sys.exit(main())
