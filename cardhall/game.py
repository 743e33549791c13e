"""State machine for one four-player card-picking game on the server."""

from __future__ import annotations

import json
import logging
import random
import threading
from collections.abc import Callable, MutableSequence
from datetime import datetime
from os import PathLike
from pathlib import Path
from typing import Optional, Union

from .card import Card
from .evaluator import HandEvaluator
from .gamer import Gamer, ROUNDS

__all__ = ["Game", "Sender", "PLAYERS", "CARDS_PER_DEAL", "HANDS_PER_ROUND"]

log = logging.getLogger(__name__)

PLAYERS = 4
CARDS_PER_DEAL = 7
HANDS_PER_ROUND = 5
SELECTED = "selected_card"

Sender = Callable[[bytes], None]


def _command_code(text: str) -> int:
    try:
        return int(text.strip())
    except ValueError:
        return 0


def _field(parts: list[str], index: int) -> str:
    if index >= len(parts):
        raise ValueError(f"command is missing field {index}: {';'.join(parts)!r}")
    return parts[index]


class Game:
    """Seats four players, deals picks in turn and scores three rounds.

    Messages to players go through senders registered with
    :meth:`add_online_user`; each takes the UTF-8 bytes of one message.
    """

    def __init__(
        self,
        *,
        history_path: Union[str, PathLike] = "gamehistiory.json",
        rng: Optional[random.Random] = None,
        evaluator: Optional[HandEvaluator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.history_path = Path(history_path)
        self._rng = rng if rng is not None else random.Random()
        self._evaluator = evaluator if evaluator is not None else HandEvaluator()
        self._clock = clock if clock is not None else datetime.now
        self._lock = threading.RLock()
        self._online: dict[int, Sender] = {}
        self.cards: list[Card] = [
            Card.from_indices(unit, rank) for unit in range(4) for rank in range(13)
        ]
        self.gamers: list[Gamer] = []
        self.ready_gamers = 0
        self.round_over_received = 0
        self.winner_round = [0] * ROUNDS
        self.card_str = ""
        self.random_selection_count: dict[str, int] = {}
        self.stop_usage_count: dict[str, int] = {}
        self._reset_play()

    def _reset_play(self) -> None:
        self.round_number = 0
        self.turn = 0
        self.hand = 0
        self.hand_part = 0
        self.removed_cards_num = 0

    @property
    def gamer_count(self) -> int:
        return len(self.gamers)

    def _find(self, username: str) -> Optional[Gamer]:
        return next((g for g in self.gamers if g.username == username), None)

    def _broadcast(self, data: str) -> None:
        for gamer in list(self.gamers):
            self.send_to_gamer(gamer.connection_id, data)

    # seating

    def add_gamer(self, connection_id: int, username: str) -> None:
        """Seat a player and tell everyone how many are waiting."""
        with self._lock:
            self.gamers.append(Gamer(connection_id, username))
            log.debug("added gamer %s", username)
            if self.gamer_count < PLAYERS:
                self._broadcast(f"count;{self.gamer_count}")
            elif self.gamer_count == PLAYERS:
                self._broadcast("start;0")

    def remove_gamer(self, username: str) -> None:
        """Unseat the first player with this name, if any."""
        with self._lock:
            gamer = self._find(username)
            if gamer is not None:
                self.gamers.remove(gamer)

    def add_online_user(self, connection_id: int, sender: Sender) -> None:
        with self._lock:
            self._online[connection_id] = sender

    def send_to_gamer(self, connection_id: int, data: str) -> None:
        """Send a message to a connection; unknown connections are skipped."""
        sender = self._online.get(connection_id)
        if sender is None:
            return
        sender(data.encode("utf-8"))
        log.debug("sent to %s: %s", connection_id, data)

    def id_by_username(self, username: str) -> Optional[int]:
        gamer = self._find(username)
        return gamer.connection_id if gamer is not None else None

    # dealing

    def start_game(self) -> None:
        with self._lock:
            self.round_number = 1
            self.hand = 1
            self.hand_part = 0
            self.shuffle(self.cards)
            self.make_new_card_str()
            self.game_manager()

    def shuffle(self, cards: MutableSequence[Card]) -> None:
        self._rng.shuffle(cards)

    def make_new_card_str(self) -> None:
        """Offer the next seven cards of the deck."""
        start = self.removed_cards_num
        deal = self.cards[start:start + CARDS_PER_DEAL]
        if len(deal) < CARDS_PER_DEAL:
            raise RuntimeError("not enough cards left in the deck")
        self.card_str = ";".join(["cards_data", *(str(card) for card in deal)])
        self.removed_cards_num += CARDS_PER_DEAL

    def update_card_str(self, selected_card: str) -> None:
        """Mark the first offered card equal to ``selected_card`` as taken."""
        parts = self.card_str.split(";")
        for index, text in enumerate(parts[1:CARDS_PER_DEAL + 1], start=1):
            if text == selected_card:
                parts[index] = SELECTED
                break
        self.card_str = ";".join(parts)

    def game_manager(self) -> None:
        """Offer the cards to whoever's turn it is, or close the round."""
        with self._lock:
            if self.hand == 1 and self.hand_part == 0:
                self.turn = self._rng.randrange(PLAYERS)
            if self.hand != HANDS_PER_ROUND + 1:
                if self.turn >= self.gamer_count:
                    raise RuntimeError("not enough gamers seated")
                self.send_to_gamer(self.gamers[self.turn].connection_id, self.card_str)
                if self.hand_part == PLAYERS - 1:
                    self.hand += 1
                    self.make_new_card_str()
                self.hand_part = (self.hand_part + 1) % PLAYERS
                self.turn = (self.turn + 1) % PLAYERS
                return
            log.debug("hand complete")
            self.round_over()
            if self.round_number == ROUNDS + 1:
                self.game_over()
                return
            self.make_new_card_str()

    # scoring

    def round_over(self) -> None:
        """Score the round once every hand is complete, then reset for the next."""
        with self._lock:
            if not self.all_gamers_have_complete_hands():
                return
            self.evaluate_all_hands()
            winner = self.determine_round_winner()
            if winner is not None:
                self.send_round_results(winner)
            for gamer in self.gamers:
                gamer.clear_hand()
            self.round_number += 1
            self.hand = 1
            self.hand_part = 0
            self.removed_cards_num = 0
            self.round_over_received = 0
            self.shuffle(self.cards)

    def evaluate_all_hands(self) -> None:
        for gamer in self.gamers:
            if gamer.has_complete_hand():
                gamer.hand_pattern = self._evaluator.evaluate(gamer.hand)

    def determine_round_winner(self) -> Optional[Gamer]:
        """Pick the best hand, record the round result for everyone, return the winner."""
        if not self.gamers:
            return None
        if not 1 <= self.round_number <= ROUNDS:
            raise RuntimeError("no round in progress")
        winner_index = 0
        winner = self.gamers[0]
        for index, gamer in enumerate(self.gamers[1:], start=1):
            current, best = gamer.hand_pattern, winner.hand_pattern
            if current is None or best is None:
                continue
            if current.strength > best.strength:
                winner, winner_index = gamer, index
            elif current.strength == best.strength:
                for mine, theirs in zip(current.cards, best.cards):
                    if mine.rank_value > theirs.rank_value:
                        winner, winner_index = gamer, index
                        break
                    if mine.rank_value < theirs.rank_value:
                        break
        slot = self.round_number - 1
        for index, gamer in enumerate(self.gamers):
            gamer.round_status[slot] = 1 if index == winner_index else 0
        self.winner_round[slot] = winner_index
        return winner

    def send_round_results(self, winner: Gamer) -> None:
        fields = ["round_over"]
        for gamer in self.gamers:
            pattern = gamer.hand_pattern
            fields += [gamer.username, pattern.name if pattern is not None else ""]
        fields.append(winner.username)
        self._broadcast(";".join(fields))

    def all_gamers_have_complete_hands(self) -> bool:
        return all(gamer.has_complete_hand() for gamer in self.gamers)

    # endings

    def _load_history(self) -> dict:
        try:
            records = json.loads(self.history_path.read_bytes())
        except (OSError, ValueError):
            return {}
        return records if isinstance(records, dict) else {}

    def game_over(self) -> None:
        """Append the game's results to the history file and clear the table."""
        with self._lock:
            records = self._load_history()
            record: dict[str, str] = {}
            winners = ""
            for gamer in self.gamers[:PLAYERS]:
                record[gamer.username] = ";".join(str(s) for s in gamer.round_status)
                if gamer.num_of_wins() >= 2:
                    winners += gamer.username + ";"
            record["winner"] = winners
            record["data"] = self._clock().ctime()
            records[str(len(records))] = record
            try:
                self.history_path.write_text(
                    json.dumps(records, indent=4, ensure_ascii=False) + "\n",
                    encoding="utf-8",
                )
            except OSError:
                log.exception("could not write game history")
            self._reset_play()
            self.round_over_received = 0
            self.gamers.clear()
            self.random_selection_count.clear()
            self.stop_usage_count.clear()

    def _finish(self, flagged: str, flagged_msg: str, others_msg: str) -> None:
        for gamer in list(self.gamers):
            message = flagged_msg if gamer.username == flagged else others_msg
            self.send_to_gamer(gamer.connection_id, message)

    def game_over_random(self) -> None:
        """End the game because a player relied on random picks too often."""
        with self._lock:
            violator = next(
                (name for name in sorted(self.random_selection_count)
                 if self.random_selection_count[name] > 2),
                "",
            )
            self._finish(violator, "finishgame;-1", "finishgame;0")
            self._reset_play()
            self.random_selection_count.clear()
            self.gamers.clear()
            log.debug("game terminated due to excessive random selections")

    def game_over_stop(self) -> None:
        """End the game because a player stopped it."""
        with self._lock:
            stopper = next(
                (name for name in sorted(self.stop_usage_count)
                 if self.stop_usage_count[name] > 0),
                "",
            )
            self._finish(stopper, "finishgame;0", "finishgame;-1")
            self._reset_play()
            self.random_selection_count.clear()
            self.stop_usage_count.clear()
            self.gamers.clear()
            log.debug("game terminated due to stop usage")

    # protocol

    def handle_data(self, connection_id: int, command_str: str) -> None:
        """Act on one game command received from a connection."""
        parts = command_str.split(";")
        code = _command_code(parts[0])
        with self._lock:
            if code == 6:
                self.add_gamer(connection_id, _field(parts, 1))
            elif code == 7:
                username, card_text = _field(parts, 1), _field(parts, 2)
                gamer = self._find(username)
                if gamer is not None:
                    gamer.add_card(Card.parse(card_text))
                self.update_card_str(card_text)
                self.game_manager()
            elif code == 20:
                self.ready_gamers += 1
                if self.ready_gamers == PLAYERS:
                    self.start_game()
            elif code == 19:
                self.remove_gamer(_field(parts, 1))
            elif code == 10:
                sender_name = _field(parts, 1)
                for gamer in list(self.gamers):
                    if gamer.username != sender_name:
                        self.send_to_gamer(gamer.connection_id, command_str)
            elif code == 8:
                if len(parts) >= 2:
                    name = parts[1]
                    count = self.random_selection_count.get(name, 0) + 1
                    self.random_selection_count[name] = count
                    if count > 3:
                        self.game_over_random()
            elif code == 9:
                if len(parts) >= 2:
                    name = parts[1]
                    self.stop_usage_count[name] = self.stop_usage_count.get(name, 0) + 1
                    self.game_over_stop()
            elif code == 18:
                self.round_over_received += 1
                if self.round_over_received == self.gamer_count:
                    self.round_over_received = 0
                    self.game_manager()
            else:
                log.warning("unexpected command: %s", command_str)