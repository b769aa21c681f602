# tictactoe

A multiplayer tic-tac-toe server. Clients connect over WebSockets, sign in
with a nickname, create or join games and play moves. The server sends each
player the moves made in their game and the outcome of the game.

## Installing

    pip install .

## Running the server

    tictactoe

Options:

- `--host` – address to listen on (default `0.0.0.0`)
- `--port` – port to listen on (default `8080`)

The server runs until it is interrupted. It can also be run from code with
`tictactoe.server.Server(host, port)`: `start()` blocks while serving,
`await serve()` does the same inside a running event loop, and `stop()`
shuts it down from any thread. The `ready` event is set once the server
listens; `port` then holds the port actually bound (useful with port `0`).

## Protocol

Every message is a single line of space-separated fields; the first field is a
numeric command code.

Client to server (`tictactoe.protocol.InCommand`):

| Code | Command       | Arguments   |
|------|---------------|-------------|
| 0    | AUTH          | nickname    |
| 1    | CREATE_GAME   |             |
| 2    | GET_GAMES     |             |
| 3    | JOIN_GAME     | game id     |
| 4    | LEAVE_GAME    |             |
| 5    | MOVE          | x y         |

Server to client (`tictactoe.protocol.OutCommand`):

| Code | Reply           | Payload                                        |
|------|-----------------|------------------------------------------------|
| -1   | ERROR           | error code                                     |
| 0    | PLAYER_AUTHED   | player id                                      |
| 1    | GAME_CREATED    | game id                                        |
| 2    | GAME_LIST       | `id|nickname` for each game waiting for a player |
| 3    | JOINED_GAME     | game id, nickname of the game's creator        |
| 4    | LEFT_GAME       |                                                |
| 5    | MOVED           | x y mark nickname of the player who moved      |
| 6    | OPPONENT_JOINED | nickname                                       |
| 7    | GAME_ENDED      | 0 draw, 1 opponent left, 2 win + winner's nickname |

Error codes (`tictactoe.protocol.ErrorCode`): 0 unknown command,
1 incorrect format, 2 not signed in or already signed in, 3 cannot join,
4 cannot create, 5 cannot leave, 6 illegal move.

Every command except AUTH needs a signed-in player. A successful move gets no
direct reply: both players receive a `MOVED` message instead. The first player
to join a game plays X and moves first. A game is discarded once it ends or a
player leaves it; when a player leaves or disconnects during a game with two
players, the other player receives `GAME_ENDED 1`.

`tictactoe.protocol.parse_message` turns a server reply into a `Message`
with its `code`, optional `error_code` and remaining `message` text; it raises
`ValueError` for malformed input.

## Using the game logic directly

    from tictactoe.player import PlayerManager
    from tictactoe.game_manager import GameManager

    players = PlayerManager()
    games = GameManager()

    alice = players.create_player("alice")
    bob = players.create_player("bob")
    alice.notification_handler = print

    game_id = games.create_game()
    games.add_player_to_game(alice, game_id)
    games.add_player_to_game(bob, game_id)
    games.make_move(alice, 0, 0)

Game events reach a player as `tictactoe.notification.Notification` objects
through the player's `notification_handler`. `tictactoe.session.Session`
handles the text commands of one client without any network, and
`tictactoe.session.format_notification` renders an event as a server message.

## What it does not do

There is no client program: any WebSocket client that speaks the protocol
above can play. Players and games live only in memory and are lost when the
server stops; nicknames are not checked or reserved.

## Tests

    pip install .[test]
    pytest