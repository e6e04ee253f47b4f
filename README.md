# proofofduel

A two-player duel played over the network. Each round you are shown five
keys drawn from Q, W, E and R. Type all five correctly and your gunslinger
fires, costing the opponent one heart out of five. A wrong key starts the
sequence over with freshly drawn keys. A player who runs out of hearts loses;
if both run out together it is a draw.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Playing

Start the server first. It accepts two players; any further connection is
closed straight away. Player 1 goes to the first free slot, player 2 to the
other.

```
proofofduel-server [--host ADDRESS] [--port PORT]
```

The server binds `0.0.0.0` on port 6000 by default.

Then start a client for each player:

```
proofofduel [--host ADDRESS] [--port PORT]
```

Clients connect to `127.0.0.1` on port 6000 by default.

The client opens a pygame window. Buttons can be clicked with the mouse;
Enter presses the first button on the screen and Escape the last one.

- **Main menu**: *Play Now* connects to the server, *Quit* closes the game.
- **Lobby**: shows `Waiting for players: n/2`. Once the server reports both
  players, a three-second countdown (`Game starts in: n`) runs and the duel
  begins. *Back* disconnects and returns to the main menu.
- **Duel**: both players are drawn with their hearts, your own labelled
  `You`. The five keys are shown in the middle; a correctly typed key turns
  green.
- **Result**: `You Win!`, `You Lose!` or `It's a Draw!`. *Back to Main Menu*
  disconnects and clears all match state for another round.

## Using the pieces

The game logic can be driven without a window:

- `proofofduel.shooting.ShootingStates` tracks the five-key sequence.
  `press_key` judges one press and returns a `KeyOutcome` that says whether
  it was correct, whether the keys should be drawn anew, and, once all five
  are typed, the states to send.
- `proofofduel.player` holds `PlayerHeartsStatus`, `ShootingLock` and the
  rules for a shot (`shooting_response`) and for the end of the game
  (`game_over_messages`), as well as the on-screen positions of players,
  hearts and labels.
- `proofofduel.screens` holds the menu states, the `GameStartTimer`
  countdown and the texts and button colours of each screen.
- `proofofduel.server.DuelServer` is the lobby and relay. `connect` admits a
  client (raising `ConnectionRefusedError` when the lobby is full) and
  `handle_message` returns the deliveries a client message causes; `serve`
  runs it on an asyncio TCP server.
- `proofofduel.protocol` defines the game states, channels and messages and
  their wire format: one JSON object per line,
  `{"channel": n, "message": {"<Variant>": {...}}}`, handled by
  `encode_message`, `decode_server_message` and `decode_client_message`,
  which raise `ProtocolError` on bad input.
- `proofofduel.connection.ClientSession` applies server messages to a
  client's state; `ServerConnection` is the non-blocking TCP link to the
  server.
- `proofofduel.app.DuelGame` ties these together: `handle_key` and
  `update` drive the game, `run` opens the window.

## What it does not do

- Graphics are plain shapes and text: players are outlined rectangles,
  hearts are circles. There are no sprites or animations.
- No sound is played. Background music and gun shots are only tracked as
  game state.
- The link between client and server is plain, unencrypted TCP with no
  authentication.