"""
Sokoban Environment Simple Example

This script demonstrates basic usage of the Sokoban environment.
It shows how to connect to a running server, reset it, make moves,
undo, and save/load the move history.

Usage:
    # In one shell
    uvicorn sokoban_puzzle.server.app:app --port 8000

    # In another
    python examples/sokoban_simple.py
"""

import sys

from sokoban_puzzle import SokobanEnv


def print_board(observation):
    """Print a visual representation of the Sokoban board."""
    width = observation.board_shape[1]
    print("\nCurrent Board:")
    print("─" * width)
    for row in observation.board:
        print(row)
    print("─" * width)
    print(f"Valid moves: {', '.join(observation.valid_moves) or 'none'}")


def main(base_url: str = "http://localhost:8000"):
    print("Sokoban Environment Example")
    print("=" * 50)

    with SokobanEnv(base_url=base_url) as sokoban_env:
        print("\nResetting environment on level 2...")
        result = sokoban_env.reset(level=2)

        print("\nInitial State:")
        print(f"  Board size: {result.observation.board_shape}")
        print(f"  Number of boxes: {result.observation.num_boxes}")
        print(f"  Player position: {result.observation.player_position}")
        print(f"  Boxes on targets: {result.observation.boxes_on_goals}/{result.observation.num_targets}")

        print_board(result.observation)

        # Walk round behind the box, bump into the wall once, then push it home
        example_moves = ["WEST", "WEST", "NORTH", "EAST", "EAST", "EAST"]

        for i, direction in enumerate(example_moves, 1):
            print(f"\n--- Move {i}: {direction} ---")
            result = sokoban_env.move(direction)

            print(result.observation.message)
            print(f"Player position: {result.observation.player_position}")
            print(f"Boxes on targets: {result.observation.boxes_on_goals}/{result.observation.num_targets}")
            print_board(result.observation)

            if result.observation.is_solved:
                print("\n" + "=" * 50)
                print("CONGRATULATIONS! Puzzle solved!")
                print(f"Completed in {result.observation.moves_count} moves")
                print(f"Pushes: {result.observation.pushes_count}")
                print("=" * 50)
                break

        print("\nUndoing the last move...")
        result = sokoban_env.undo()
        print(result.observation.message)
        print_board(result.observation)

        print("\nSaving and reloading the move history...")
        print(sokoban_env.save().observation.message)
        print(sokoban_env.clear().observation.message)
        result = sokoban_env.load()
        print(result.observation.message)
        print(f"Moves replayed: {sokoban_env.state().moves}")
        print(sokoban_env.render())

        print("\nMoving on to the next level...")
        result = sokoban_env.next_level()
        print(result.observation.message)
        print_board(result.observation)


if __name__ == "__main__":
    main(*sys.argv[1:])
