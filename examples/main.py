"""
main.py — Walk through a turnflow match session
===============================================

Drives a three-player match against the in-memory platform and prints
what the presenter would show.

    python main.py

The session will:
  1. Load the match when the app is opened for a turn
  2. Prompt for an exchange reply, then show the cancellation follow-up
  3. Merge a completed exchange and end the turn
"""

from datetime import datetime, timezone

from turnflow import (
    Exchange,
    ExchangeCancellation,
    ExchangeReplies,
    ExchangeReply,
    ExchangeRequest,
    EndTurn,
    InMemoryPlatform,
    MatchSession,
    RecordingPresenter,
    TurnEvent,
    demo_match,
    encode_reply,
    read_records,
)

# ── Configuration ──
config = {
    "local_player_id": "alice",
    "turn_timeout_seconds": 600,
    "log_file": "turnflow-demo.log",
}

platform = InMemoryPlatform(config["local_player_id"])
presenter = RecordingPresenter()
session = MatchSession(config=config, platform=platform, presenter=presenter)
presenter.bind(session)

match = demo_match("m1", ["alice", "bob", "carol"], holder="alice")

# ── Alice opens the app for her turn; Bob has asked for a trade ──
request = Exchange("m1-x1", initiator="bob", recipients=("alice",), message="Trade wood for sheep?")
match.exchanges.append(request)
session.post(TurnEvent(match, became_active=True))
session.process_pending()

# ── Bob changes his mind before Alice answers ──
session.post(ExchangeCancellation(request, match, sender="Bob"))
session.process_pending()
presenter.close()
session.process_pending()

# ── Carol answers an exchange Alice sent earlier ──
trade = Exchange("m1-x2", initiator="alice", recipients=("bob", "carol"))
for player, answer in (("bob", "accepted"), ("carol", "declined")):
    trade.add_reply(ExchangeReply(player, encode_reply(answer), datetime.now(timezone.utc)))
session.post(ExchangeReplies(trade, match, sender="carol"))
session.process_pending()

# ── Alice ends her turn ──
session.post(EndTurn())
session.process_pending()

print("Presented alerts:")
for caption in presenter.captions:
    print(f"  - {caption}")
print("Platform calls:", ", ".join(platform.operations()))
print("Match state records:", read_records(match.state))
print("Next turn order:", platform.calls[-1].args["next"])
