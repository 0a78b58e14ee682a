# netfrag/domain/errors.py


class LoadError(Exception):
    """Base for every condition that aborts a graph load."""

    kind = "load"


class DecodeError(LoadError):
    kind = "decode"

    def __init__(self, msg: str, *, position: int | None = None):
        super().__init__(msg if position is None else f"{msg} (record {position})")
        self.position = position


class RewindError(LoadError):
    kind = "rewind"


class DanglingReferenceError(LoadError):
    kind = "dangling_reference"

    def __init__(self, sequence_id: int, point_id: int):
        super().__init__(f"sequence {sequence_id} references unknown point {point_id}")
        self.sequence_id = sequence_id
        self.point_id = point_id
