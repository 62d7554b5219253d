from dataclasses import dataclass

DRAW_MESSAGE = "Draw"


@dataclass(frozen=True)
class Outcome:
    message: str               # "Draw" or "<winner> wins against <loser>"
    winner_index: int | None   # 0 or 1 (argument position), None on draw

    @property
    def is_draw(self) -> bool:
        return self.winner_index is None
