"""Domain entities."""

from collections.abc import Iterable
from dataclasses import InitVar, dataclass, field
from datetime import datetime

from tunelist.domain.exceptions import (
    InvalidArgumentException,
    InvalidTrackPositionException,
)
from tunelist.domain.value_objects import PlaylistId, TrackId


# Yo, Track is a flat metadata record. Identity is the ONLY basis for equality - two tracks
# with identical title/artist/duration but different IDs are different tracks, and a track
# whose fields were edited is still the same track. That's why eq=False + custom __eq__/__hash__.
# No field validation here: non-blank title/artist and positive duration are enforced by the
# request schemas in the API layer. created_at stays None until the repository first stores it.
@dataclass(eq=False)
class Track:
    """Track entity representing a music track."""

    id: TrackId
    title: str
    artist: str
    duration: int  # seconds
    created_at: datetime | None = None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Track):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def update_title(self, title: str) -> None:
        """Update track title."""
        self.title = title

    def update_artist(self, artist: str) -> None:
        """Update track artist."""
        self.artist = artist

    def update_duration(self, duration: int) -> None:
        """Update track duration in seconds."""
        self.duration = duration

    def update(self, title: str, artist: str, duration: int | None = None) -> None:
        """Update all editable fields at once; a None duration keeps the current one."""
        self.update_title(title)
        self.update_artist(artist)
        if duration is not None:
            self.update_duration(duration)


# Listen, Playlist owns an ORDERED, DUPLICATE-FREE sequence of Track references. Order is
# playback order. The list is private (_tracks) - every mutation goes through the methods below
# so these always hold:
#   - no two entries share an identity (every insert path skips tracks already present)
#   - insert positions satisfy 0 <= position <= track_count(), else InvalidTrackPositionException
#   - the `tracks` property hands out a fresh list, callers can't reach the internal one
# The playlist doesn't own the tracks' lifecycle (aggregation) - it just references them.
# version is the optimistic concurrency counter, bumped by the repository on every update.
@dataclass(eq=False)
class Playlist:
    """Playlist entity holding an ordered collection of tracks."""

    id: PlaylistId
    name: str
    is_public: bool = False
    created_at: datetime | None = None
    version: int = 1
    initial_tracks: InitVar[Iterable[Track] | None] = None

    def __post_init__(self, initial_tracks: Iterable[Track] | None) -> None:
        self._tracks: list[Track] = []
        for track in initial_tracks or ():
            if track is not None and track not in self._tracks:
                self._tracks.append(track)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Playlist):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def tracks(self) -> list[Track]:
        """Copy of the tracks in playback order."""
        return list(self._tracks)

    @property
    def track_ids(self) -> list[TrackId]:
        """IDs of the tracks in playback order."""
        return [track.id for track in self._tracks]

    def add_track(self, track: Track | None) -> None:
        """Append a track to the end of the playlist.

        A track that is already in the playlist is ignored.

        Raises:
            InvalidArgumentException: If track is None
        """
        if track is None:
            raise InvalidArgumentException("Track cannot be None")
        if track not in self._tracks:
            self._tracks.append(track)

    def add_track_at_position(self, track: Track | None, position: int) -> None:
        """Insert a track at a 0-based position, shifting later tracks back.

        A track that is already in the playlist is ignored and keeps its current
        position; the position is still validated first.

        Raises:
            InvalidArgumentException: If track is None
            InvalidTrackPositionException: If position is outside 0..track_count()
        """
        if track is None:
            raise InvalidArgumentException("Track cannot be None")
        self._check_position(position)
        if track not in self._tracks:
            self._tracks.insert(position, track)

    # Hey future me, bulk insert has two modes. position=None behaves like add_track in a loop.
    # With a position, the bound is checked ONCE against the pre-insert length, then the input
    # is filtered (None entries, tracks already in the playlist, repeats within the input) and
    # the survivors go in as one contiguous block starting at `position`, in input order.
    # Repeats within the input are dropped in both modes - first occurrence wins.
    def add_tracks(
        self, tracks: Iterable[Track | None] | None, position: int | None = None
    ) -> None:
        """Add several tracks, either appended or as a block at a position.

        Raises:
            InvalidArgumentException: If tracks is None or empty
            InvalidTrackPositionException: If position is outside 0..track_count()
        """
        if tracks is None:
            raise InvalidArgumentException("Tracks list cannot be null or empty")
        candidates = list(tracks)
        if not candidates:
            raise InvalidArgumentException("Tracks list cannot be null or empty")

        if position is None:
            for track in candidates:
                if track is not None and track not in self._tracks:
                    self._tracks.append(track)
            return

        self._check_position(position)

        accepted: list[Track] = []
        for track in candidates:
            if track is None or track in self._tracks or track in accepted:
                continue
            accepted.append(track)

        self._tracks[position:position] = accepted

    def remove_track(self, track: Track | None) -> bool:
        """Remove the entry matching the track's identity.

        Returns:
            True if a track was removed, False if it wasn't in the playlist
        """
        if track is None or track not in self._tracks:
            return False
        self._tracks.remove(track)
        return True

    def total_duration(self) -> int:
        """Sum of all track durations in seconds."""
        return sum(track.duration for track in self._tracks)

    def track_count(self) -> int:
        """Get the number of tracks in the playlist."""
        return len(self._tracks)

    def rename(self, name: str) -> None:
        """Change the playlist name."""
        self.name = name

    def set_visibility(self, is_public: bool) -> None:
        """Make the playlist public or private."""
        self.is_public = is_public

    def _check_position(self, position: int) -> None:
        if position < 0 or position > len(self._tracks):
            raise InvalidTrackPositionException(position, len(self._tracks))


__all__ = ["Playlist", "Track"]
