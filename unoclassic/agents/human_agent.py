"""Human agent - reads decisions from the terminal."""

from unoclassic.engine import PLAYABLE_COLORS, Card, Color, DrawCard, Move, PlayCard, Player, PlayerView


class HumanAgent:
    """Decision source that prompts the human for input via terminal."""

    def request_move(
        self,
        player: Player,
        legal_moves: list[int],
        top_card: Card,
        view: PlayerView,
    ) -> Move:
        print(f"\n--- {player.name}'s turn ---")
        print("Top discard:", top_card)
        print(f"Direction: {view.direction!s}, draw pile: {view.draw_pile_count} cards")
        for other, count in view.num_cards_per_player.items():
            if other != player.name:
                print(f"  {other}: {count} cards")
        print("Your hand:")
        for i, card in enumerate(player.hand):
            marker = "*" if i in legal_moves else " "
            print(f" {marker}{i}: {card}")
        if not legal_moves:
            print("No playable cards, you must draw.")
            return DrawCard()

        while True:
            try:
                raw = input("Card number to play, or 'd' to draw: ").strip().lower()
            except EOFError:
                return DrawCard()
            if raw in ("d", "draw"):
                return DrawCard()
            try:
                return PlayCard(int(raw))
            except ValueError:
                print("Invalid. Try again.")

    def request_wild_color(self, player: Player) -> Color | str:
        options = "  ".join(f"{i}: {c.value.upper()}" for i, c in enumerate(PLAYABLE_COLORS, start=1))
        print(options)
        try:
            raw = input("Choose a color (1-4): ").strip().lower()
        except EOFError:
            return Color.RED
        if raw.isdigit() and 1 <= int(raw) <= len(PLAYABLE_COLORS):
            return PLAYABLE_COLORS[int(raw) - 1]
        # Color names pass through; anything else is rejected by the engine.
        return raw

    def request_play_drawn_card(self, player: Player, drawn_card: Card) -> bool:
        print(f"You drew {drawn_card}.")
        try:
            raw = input("Play it now? (y/n): ").strip().lower()
        except EOFError:
            return False
        return raw in ("y", "yes")
