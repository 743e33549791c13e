# cardhall

A small multiplayer card game. Four players take turns picking cards from
offers of seven until each holds five; the best hand wins the round. After
three rounds the results are written to a history file. The package holds
the game server, user account storage, a hand evaluator and a few helpers
for the client side of the protocol.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running the server

```
cardhall-server [port] [--host HOST] [--users FILE] [--history FILE]
```

- `port` defaults to `10200`.
- `--host` is the address to listen on (all interfaces by default).
- `--users` is the accounts file, `users.json` by default.
- `--history` is the finished-games file, `gamehistiory.json` by default.

On start the server prints the IPv4 address of the first wireless interface
that is up (`cardhall.server.wifi_ipv4_address`, empty if there is none) and
the port it listens on. It runs until interrupted.

From Python, `cardhall.server.GameServer` does the same: `start(port)`
returns `False` if it cannot listen, `serve_forever()` accepts clients, each
on its own thread, and `shutdown()` stops it. Every command a client sends is
handed to a `CommandDispatcher`, which answers account commands itself and
passes game commands to a `cardhall.game.Game`.

## Cards and hands

A card has a unit (`Diamond`, `Coin`, `Dollar`, `Gold`) and a rank (`2` to
`10`, then `Soldier`, `Queen`, `King`, `Bitcoin`). Cards are written as
`Unit-Rank`:

```python
from cardhall.card import Card

card = Card.parse("Gold-Queen")
top = Card.from_indices(0, 12)      # Diamond-Bitcoin
str(top)                            # "Diamond-Bitcoin"
```

Cards order by rank first, then by unit strength (Diamond 4, Gold 3,
Dollar 2, Coin 1), available as `Card.rank_value` and `Card.unit_value`.

`HandEvaluator` from `cardhall.evaluator` returns the strongest pattern that
a five-card hand makes, or `None` for any other number of cards:

```python
from cardhall.card import Card
from cardhall.evaluator import HandEvaluator

hand = [Card.parse(text) for text in
        ("Gold-Bitcoin", "Gold-King", "Gold-Queen", "Gold-Soldier", "Gold-10")]
pattern = HandEvaluator().evaluate(hand)
pattern.name        # "Hand Golden"
pattern.strength    # 10
```

The patterns are tried against the hand in the order it is given, strongest
first:

| Strength | Name             | Class          | Module               |
|----------|------------------|----------------|----------------------|
| 10       | Hand Golden      | `GoldenHand`   | `cardhall.patterns`  |
| 9        | Hand Order       | `OrderHand`    | `cardhall.patterns`  |
| 8        | Hand 4+1         | `FourRank`     | `cardhall.patterns`  |
| 7        | Penthouse        | `Penthouse`    | `cardhall.patterns`  |
| 6        | Hand MSC         | `MscHand`      | `cardhall.patterns`  |
| 5        | Series           | `Series`       | `cardhall.patterns`  |
| 4        | Hand 3+2         | `ThreeOfAKind` | `cardhall.pairs`     |
| 3        | Hand Pair Double | `DoublePair`   | `cardhall.pairs`     |
| 2        | Hand Pair Single | `SinglePair`   | `cardhall.pairs`     |
| 1        | Hand Messy       | `MessyHand`    | `cardhall.pairs`     |

`cardhall.patterns` also has `FourOfAKind`, another "Hand 4+1" pattern that
the evaluator does not use. Two patterns of the same class are ordered with
`compare`, which returns 1, 0 or -1 and raises `TypeError` for patterns of
different classes. The helpers in `cardhall.hands` (`sort_descending`,
`rank_counts`, `is_flush`, `is_straight`) are what the patterns are built on.

## Accounts

`UserStore` in `cardhall.accounts` keeps users in a JSON file keyed by
username, with SHA-256 password hashes (`hash_password`):

- `register(...)` returns `False` if the username is taken.
- `sign_in(username, password)` and `check_recovery(username, phone_number)`
  return whether the details match.
- `update_info(...)` replaces a user's details, possibly under a new name.
- `change_password(password, username, phone_number)` sets a new password.
- `get_info(username)` returns a `UserInfo` with empty fields for an unknown
  user.

Calls that need to read the file raise `OSError` when it cannot be read; the
server turns that into its `-1` replies.

## Client helpers

- `cardhall.validation` checks user input before it is sent
  (`valid_username`, `valid_password`, `valid_name`, `valid_email`,
  `valid_phone_number`), builds sign-in and sign-up commands
  (`sign_in_message`, `sign_up_message` from a `User`) and reads sign-in
  replies (`interpret_sign_in_reply`). Bad input raises `ValidationError`,
  whose `title` names the kind of problem.

  ```python
  from cardhall.validation import sign_in_message

  sign_in_message("alice", "password")   # "2;alice;password"
  ```

- `cardhall.connection.SocketHandler` is a plain TCP connection to the
  server (`127.0.0.1:10200` by default) that sends text with
  `send_message`, connecting first if needed, and reads it with `receive`.
- `cardhall.waiting.WaitingRoom` joins the game queue, follows the player
  count and the dots of its waiting text, reports itself ready when the game
  starts and sends the leave command on `cancel`.

## Protocol

Messages are fields joined by `;`, with a number first:

| Command | Meaning |
|---------|---------|
| `1`  | sign up; reply `1`, `0` (name taken) or `-1` |
| `2`  | sign in; reply `1`, `0` or `-1` |
| `3`  | change password after recovery; no reply |
| `-4` | check a recovery request; reply `1`, `0` or `-1` |
| `4`  | get a user's details; reply `2;name;lastname;email;phone` or `-1;0` |
| `5`  | update a user's details; reply `1;0` or `-1;0` |
| `6`  | join the game queue |
| `7`  | pick a card |
| `8`  | random pick (more than three by one player ends the game) |
| `9`  | stop (ends the game) |
| `10` | pass a message to the other players |
| `18` | round results seen |
| `19` | leave the queue |
| `20` | ready to play |

The server sends `count;N` while players join, `start;0` when four are in,
`cards_data;...` when it is a player's turn to pick, `round_over;...` after
each round and `finishgame;0` or `finishgame;-1` when a game is cut short.

## What is not included

There is no graphical client: no sign-in or sign-up screens, no menu, no
game table for picking cards and no viewer for the game history. The client
side offered here stops at input checks, the connection and the waiting
room; playing a game needs a client that speaks the protocol above.