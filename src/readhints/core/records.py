from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PointHit:
    ref_id: int
    ref_off: int
    fw: bool
    length: int
    five_prime_off: int  # offset of the seed from the read's 5' end

    @property
    def end(self) -> int:
        return self.ref_off + self.length

    def as_row(self) -> tuple[int, int, str, int, int]:
        strand = "+" if self.fw else "-"
        return (self.ref_id, self.ref_off, strand, self.length, self.five_prime_off)


@dataclass(frozen=True)
class IntervalHit:
    ref_id: int
    left: int
    length: int  # right - left + 1
    hit_length: int  # encoded seed length, negated when left was negative
    five_prime_off: int
    fw: bool = True  # not encoded for intervals

    @property
    def right(self) -> int:
        return self.left + self.length - 1

    def as_row(self) -> tuple[int, int, int, int, int, int]:
        return (
            self.ref_id,
            self.left,
            self.right,
            self.length,
            self.hit_length,
            self.five_prime_off,
        )
