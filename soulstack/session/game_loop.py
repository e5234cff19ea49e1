"""
Game Loop - Turn flow, the action-reaction window and victory.

Each turn:
1. Push StartOfTurn for the active player and resolve it
2. Loot step: the active player loots 1
3. The active player picks actions until ending the turn
4. After every push, players get a chance to respond before the top
   of the stack resolves
5. With an empty stack, check the field (victory, shop, monster slots)

Every seat is driven by a BotPolicy; the console player is a policy too.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import TYPE_CHECKING

from ..bots.policy import BotPolicy, PolicyChooser
from ..engine_core import ids
from ..engine_core.action import ActionType
from ..engine_core.choices import RoutingChooser
from ..engine_core.events import EndTurn, StartOfTurn
from ..engine_core.reducer import Reducer
from ..engine_core.resolver import Resolver

if TYPE_CHECKING:
    from ..engine_core.board import Board
    from ..engine_core.player import Player

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    READY = "ready"
    IN_TURN = "in_turn"
    GAME_OVER = "game_over"


@dataclass
class GameResult:
    """
    Result of running a game.

    reason is "victory", "turn_limit" or "stalled".
    """
    winners: list[str]
    turns_played: int
    reason: str
    log: list[str] = field(default_factory=list)


class GameLoop:
    """
    The main game loop driver.

    Usage:
        board = new_game(config)
        loop = GameLoop(board, {"p1": GreedyPolicy(), "p2": RandomPolicy(7)})
        result = loop.run(max_turns=200)
    """

    # Safety limits; a well-behaved game never reaches them
    MAX_DECISIONS_PER_TURN = 200
    MAX_RESPONSE_ROUNDS = 20
    MAX_RESOLUTIONS = 10_000

    def __init__(self, board: Board, agents: dict[str, BotPolicy], route_choices: bool = True):
        self.board = board
        self.agents = agents
        self.reducer = Reducer(board)
        self.resolver = Resolver(board)
        self.state = LoopState.READY
        self.winners: list[Player] = []
        self.turns_played = 0
        self.log: list[str] = []
        if route_choices:
            seats = {pid: PolicyChooser(agent) for pid, agent in agents.items()}
            board.chooser = RoutingChooser(seats, default=board.chooser)

    # ========================================================================
    # Running
    # ========================================================================

    def run(self, max_turns: int = 200) -> GameResult:
        """Play turns until the game is over or max_turns is reached."""
        while self.turns_played < max_turns and not self.winners and self.state != LoopState.GAME_OVER:
            self.play_turn()

        winners = [p.player_id for p in self.winners]
        if winners:
            reason = "victory"
        elif self.state == LoopState.GAME_OVER:
            reason = "stalled"
        else:
            reason = "turn_limit"
        logger.info("Game over after %d turns (%s): %s", self.turns_played, reason, winners or "no winner")
        return GameResult(winners=winners, turns_played=self.turns_played, reason=reason, log=list(self.log))

    def play_turn(self) -> list[Player]:
        """
        Play one full turn of the active player.

        Returns the winners, if the turn ended the game.
        """
        board = self.board
        player = board.active_player
        turns_ended = board.turns_ended
        self.state = LoopState.IN_TURN

        board.push(player, StartOfTurn())
        self.run_stack(player)
        if self._finished():
            self.state = LoopState.GAME_OVER
            return self.winners

        # Loot step
        board.draw_loot_cards(player, 1)

        ended = False
        for _ in range(self.MAX_DECISIONS_PER_TURN):
            if player.force_end or self._finished():
                break
            legal = self.reducer.generator.generate(player)
            decision = self._agent(player).select_action(board, player, legal)
            result = self.reducer.apply(decision.action)
            if not result.success:
                logger.warning("%s: %s", player.player_id, result.error)
                continue
            self._record(player, decision.action.describe())
            if decision.action.action_type == ActionType.END_TURN:
                ended = True
            if result.acted:
                self.run_stack(player)
            if ended:
                break
        else:
            logger.warning("%s made too many decisions; ending the turn", player.player_id)

        # Forced or abandoned turns still go through EndTurn, including
        # one whose EndTurn was discarded by a death in its response window
        for _ in range(self.MAX_RESPONSE_ROUNDS):
            if board.turns_ended != turns_ended or self._finished():
                break
            board.stack.drain()
            board.push(player, EndTurn())
            self.run_stack(player)
        else:
            logger.warning("%s's EndTurn never resolved; ending the turn directly", player.player_id)
            board.stack.drain()
            board.end_turn(player)

        self.turns_played += 1
        if not self.winners:
            self.winners = board.check_victory()
        if self.winners:
            self.state = LoopState.GAME_OVER
        elif not board.living_players():
            self.state = LoopState.GAME_OVER
        else:
            self.state = LoopState.READY
        return self.winners

    # ========================================================================
    # Stack and responses
    # ========================================================================

    def run_stack(self, initiator: Player) -> None:
        """
        Resolve until the stack is empty, opening a response window
        before every resolution, then check the field.

        Refilling the field can reveal bonus cards, which push again.
        """
        board = self.board
        resolved = 0
        while resolved < self.MAX_RESOLUTIONS:
            while not board.stack.is_empty and resolved < self.MAX_RESOLUTIONS:
                self.response_window(initiator)
                self.resolver.resolve_next()
                resolved += 1
            winners = board.check_the_field()
            if winners:
                self.winners = winners
                return
            if board.stack.is_empty:
                return
        logger.warning("Stack did not settle after %d resolutions; discarding it", resolved)
        board.stack.drain()

    def response_window(self, initiator: Player) -> None:
        """
        Offer responses: other players in turn order, then the initiator,
        repeated until a full round passes with nobody acting.

        Trinity Shield on the active player keeps everyone else out.
        """
        board = self.board
        order = [p for p in board.turn_order(initiator) if p is not initiator] + [initiator]
        shielded = board.active_player.has_item(ids.TRINITY_SHIELD)
        for _ in range(self.MAX_RESPONSE_ROUNDS):
            acted = False
            for player in order:
                if board.stack.is_empty:
                    return
                if shielded and not board.is_active(player):
                    continue
                acted = self._offer_response(player) or acted
            if not acted:
                return

    def _offer_response(self, player: Player) -> bool:
        legal = self.reducer.generator.generate(player, responding=True)
        if all(a.action_type == ActionType.PASS for a in legal):
            return False
        decision = self._agent(player).select_action(self.board, player, legal)
        result = self.reducer.apply(decision.action, responding=True)
        if not result.success:
            logger.warning("%s: %s", player.player_id, result.error)
            return False
        if result.acted:
            self._record(player, decision.action.describe())
        return result.acted

    # ========================================================================
    # Helpers
    # ========================================================================

    def _agent(self, player: Player) -> BotPolicy:
        agent = self.agents.get(player.player_id)
        if agent is None:
            raise KeyError(f"No agent seated for {player.player_id}")
        return agent

    def _finished(self) -> bool:
        return bool(self.winners)

    def _record(self, player: Player, description: str) -> None:
        self.log.append(f"turn {self.board.turn_number} {player.player_id}: {description}")
