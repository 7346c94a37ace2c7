"""
Sound Library - Runtime sound list management and persistence
"""

import enum
import os
import shutil
import threading
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from .codec import CodecError, decode_sounds, encode_sounds
from .sound_record import SoundRecord


class LibraryState(enum.Enum):
    """Load lifecycle of a SoundLibrary"""
    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    READY = "ready"


class SoundLibrary:
    """
    Ordered, persisted collection of sound records.

    Provides methods for:
    - Loading the library document once, in the background
    - Adding, updating and removing sounds
    - Saving the whole list after every mutation, in the background

    Saves are coalesced by a single worker thread: however many mutations
    happen while a save is in flight, at most one more save follows, and it
    always writes the latest list. Saves wait for the initial load so the
    document is never overwritten before it was read. A library that was
    never loaded keeps its pending save until load() is called.
    """

    def __init__(self, storage_dir: Union[str, Path], logger,
                 library_file_name: str = "sounds.json", autoload: bool = True):
        """
        Initialize the library and start loading it.

        Args:
            storage_dir: Directory holding the library document and audio files
            logger: ClassLogger instance for logging
            library_file_name: Name of the JSON document inside storage_dir
            autoload: Start the background load immediately
        """
        self.storage_dir = Path(storage_dir)
        self.library_path = self.storage_dir / library_file_name
        self.logger = logger

        self._sounds: List[SoundRecord] = []
        self._lock = threading.RLock()
        self._state = LibraryState.UNINITIALIZED
        self._loaded = threading.Event()

        # Save queue state, guarded by _save_condition
        self._save_condition = threading.Condition()
        self._save_requested = False
        self._save_in_flight = False
        self._closing = False
        self._saves_completed = 0

        self._saver = threading.Thread(target=self._save_worker, name="SoundLibrarySaver", daemon=True)
        self._saver.start()

        if autoload:
            self.load()

    # ============================================================================
    # PUBLIC METHODS
    # ============================================================================

    @property
    def state(self) -> LibraryState:
        return self._state

    @property
    def sounds(self) -> Tuple[SoundRecord, ...]:
        """Read-only snapshot of the current list"""
        return self.current_sequence()

    def current_sequence(self) -> Tuple[SoundRecord, ...]:
        """Read-only snapshot of the current list, in display order"""
        with self._lock:
            return tuple(self._sounds)

    def get(self, sound_id: str) -> Optional[SoundRecord]:
        """
        Find a sound by id.

        Returns:
            The first record with that id, or None
        """
        with self._lock:
            for sound in self._sounds:
                if sound.id == sound_id:
                    return sound
        return None

    def load(self, wait: bool = False) -> None:
        """
        Load the library document in the background.

        Runs at most once; later calls are ignored. Until the load completes
        the library looks empty. Failures are logged and leave the library
        as it is.

        Args:
            wait: Block until the load has finished
        """
        with self._lock:
            if self._state != LibraryState.UNINITIALIZED:
                self.logger.debug(f"Load already {self._state.value}, ignoring")
                start = False
            else:
                self._state = LibraryState.LOADING
                start = True

        if start:
            with self._save_condition:
                self._save_condition.notify_all()
            loader = threading.Thread(target=self._load_worker, name="SoundLibraryLoader", daemon=True)
            loader.start()

        if wait:
            self._loaded.wait()

    def wait_until_loaded(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the initial load has finished.

        Returns:
            True if loaded, False on timeout
        """
        return self._loaded.wait(timeout)

    def add(self, sound: SoundRecord) -> None:
        """Append a sound to the end of the list"""
        with self._lock:
            self._sounds.append(sound)
            self._request_save()
        self.logger.info(f'Added sound "{sound.name}" ({sound.id})')

    def update(self, sound: SoundRecord) -> None:
        """
        Replace the sound with the same id, keeping its position.

        A sound that is not in the library yet is appended instead.
        """
        with self._lock:
            index = self._index_of(sound.id)
            if index is None:
                self._sounds.append(sound)
                action = "Appended missing"
            else:
                self._sounds[index] = sound
                action = "Updated"
            self._request_save()
        self.logger.info(f'{action} sound "{sound.name}" ({sound.id})')

    def remove(self, sound: Union[str, SoundRecord]) -> bool:
        """
        Remove the first sound with the given id.

        Args:
            sound: Sound id, or a record whose id is used

        Returns:
            True if a sound was removed, False if the id was not present
        """
        sound_id = sound.id if isinstance(sound, SoundRecord) else sound
        with self._lock:
            index = self._index_of(sound_id)
            if index is None:
                self.logger.debug(f"Remove ignored, no sound with id {sound_id}")
                return False
            removed = self._sounds.pop(index)
            self._request_save()
        self.logger.info(f'Removed sound "{removed.name}" ({removed.id})')
        return True

    def remove_at(self, position: int) -> SoundRecord:
        """
        Remove the sound at a display position.

        Returns:
            The removed record

        Raises:
            IndexError: If position is outside the current list
        """
        with self._lock:
            if not 0 <= position < len(self._sounds):
                raise IndexError(
                    f"Sound position {position} out of range for library of {len(self._sounds)}"
                )
            removed = self._sounds.pop(position)
            self._request_save()
        self.logger.info(f'Removed sound "{removed.name}" at position {position}')
        return removed

    def flush(self, timeout: Optional[float] = None) -> bool:
        """
        Block until no save is pending or in flight.

        Saves queued on a library that was never loaded are not waited for.

        Returns:
            True if all saves completed, False on timeout
        """
        with self._save_condition:
            return self._save_condition.wait_for(
                lambda: not self._has_pending_save() and not self._save_in_flight,
                timeout,
            )

    def close(self, timeout: Optional[float] = None) -> None:
        """Finish pending saves and stop the save worker"""
        self.flush(timeout)
        with self._save_condition:
            if self._save_requested and self._state is LibraryState.UNINITIALIZED:
                self.logger.warning("Closing a library that was never loaded, unsaved changes dropped")
            self._closing = True
            self._save_condition.notify_all()
        self._saver.join(timeout)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get library statistics for debugging.

        Returns:
            Dictionary with library_path, state, sound_count and saves_completed
        """
        with self._lock:
            sound_count = len(self._sounds)
        return {
            "library_path": str(self.library_path),
            "state": self._state.value,
            "sound_count": sound_count,
            "saves_completed": self._saves_completed,
        }

    # ============================================================================
    # PRIVATE METHODS
    # ============================================================================

    def _index_of(self, sound_id: str) -> Optional[int]:
        for index, sound in enumerate(self._sounds):
            if sound.id == sound_id:
                return index
        return None

    def _has_pending_save(self) -> bool:
        # Saves wait for a load; without one they stay queued
        return self._save_requested and self._state is not LibraryState.UNINITIALIZED

    def _request_save(self) -> None:
        with self._save_condition:
            self._save_requested = True
            self._save_condition.notify_all()

    def _load_worker(self) -> None:
        records = None
        try:
            records = self._read_document()
        except Exception as e:
            self.logger.error(f"Unexpected failure loading {self.library_path}: {e}", exception=e)
        finally:
            self._finish_load(records)

    def _read_document(self) -> Optional[List[SoundRecord]]:
        """
        Read and decode the library document.

        Returns:
            Decoded records, or None if there is nothing usable to load
        """
        try:
            data = self.library_path.read_bytes()
        except FileNotFoundError:
            self.logger.info(f"No library document at {self.library_path}, starting empty")
            return None
        except OSError as e:
            self.logger.error(f"Failed to read {self.library_path}: {e}", exception=e)
            return None

        try:
            result = decode_sounds(data)
        except CodecError as e:
            self.logger.error(f"Library document is unreadable: {e}")
            self._set_aside(move=True)
            return None

        for index, reason in result.rejected:
            self.logger.warning(f"Skipping malformed sound #{index}: {reason}")
        if result.is_partial:
            self._set_aside(move=False)

        self.logger.info(f"Loaded {len(result.records)} sounds from {self.library_path}")
        return result.records

    def _finish_load(self, records: Optional[List[SoundRecord]]) -> None:
        """Swap the loaded records in, keeping anything changed while loading"""
        with self._lock:
            if records is not None:
                changed = {sound.id: sound for sound in self._sounds}
                loaded_ids = {sound.id for sound in records}
                merged = [changed.get(sound.id, sound) for sound in records]
                merged.extend(sound for sound in self._sounds if sound.id not in loaded_ids)
                self._sounds = merged
            self._state = LibraryState.READY
        self._loaded.set()

    def _set_aside(self, move: bool) -> None:
        """Keep a copy of a damaged document before a later save overwrites it"""
        timestamp = datetime.now().strftime('%Y-%m-%d_%H-%M-%S')
        backup_name = f"{self.library_path.name}.corrupt-{timestamp}"
        backup_path = self.library_path.with_name(backup_name)
        counter = 1
        while backup_path.exists():
            backup_path = self.library_path.with_name(f"{backup_name}-{counter}")
            counter += 1
        try:
            if move:
                os.replace(self.library_path, backup_path)
            else:
                shutil.copy2(self.library_path, backup_path)
            self.logger.warning(f"Damaged library document kept as {backup_path}")
        except OSError as e:
            self.logger.error(f"Failed to set aside damaged document: {e}", exception=e)

    def _save_worker(self) -> None:
        while True:
            with self._save_condition:
                self._save_condition.wait_for(lambda: self._has_pending_save() or self._closing)
                if not self._has_pending_save():
                    return
                self._save_requested = False
                self._save_in_flight = True

            try:
                self._loaded.wait()
                self._write_snapshot()
            except Exception as e:
                self.logger.error(f"Unexpected failure saving library: {e}", exception=e)
            finally:
                with self._save_condition:
                    self._save_in_flight = False
                    self._save_condition.notify_all()

    def _write_snapshot(self) -> None:
        """Write the current list to a temp file and move it over the document"""
        snapshot = self.current_sequence()
        temp_path = self.library_path.with_name(self.library_path.name + ".tmp")
        try:
            data = encode_sounds(snapshot)
            self.storage_dir.mkdir(parents=True, exist_ok=True)
            temp_path.write_bytes(data)
            os.replace(temp_path, self.library_path)
        except OSError as e:
            self.logger.error(f"Failed to save library to {self.library_path}: {e}", exception=e)
            return
        self._saves_completed += 1
        self.logger.debug(f"Saved {len(snapshot)} sounds to {self.library_path}")
