from __future__ import annotations

import random
import sys
import unittest
from pathlib import Path


REPO_DIR = Path(__file__).resolve().parents[1]
if str(REPO_DIR) not in sys.path:
    sys.path.insert(0, str(REPO_DIR))


from draughts.board import Board  # noqa: E402
from draughts.pieces import Color, King, Man, Piece  # noqa: E402


def random_board(rng: random.Random, size: int, per_side: int) -> Board:
    squares = [(r, c) for r in range(size) for c in range(size) if r % 2 == c % 2]
    rng.shuffle(squares)
    pieces: list[Piece] = []
    for index, (row, col) in enumerate(squares[: per_side * 2]):
        color = Color.WHITE if index % 2 == 0 else Color.BLACK
        cls = King if rng.random() < 0.3 else Man
        pieces.append(cls(color, row, col))
    return Board.from_pieces(size, pieces, turn=rng.choice([Color.WHITE, Color.BLACK]))


class ManMoveTests(unittest.TestCase):
    def test_single_capture_replaces_basic_moves(self) -> None:
        black = Man(Color.BLACK, 1, 1)
        board = Board.from_pieces(8, [black, Man(Color.WHITE, 2, 2)])

        moves = black.possibleMoves(board)

        self.assertEqual(len(moves), 1)
        move = moves[0]
        self.assertTrue(move.is_capture)
        self.assertEqual(move.end, (3, 3))
        self.assertEqual(move.weight, 1)
        self.assertIsNone(move.previous)
        self.assertEqual(move.captured.position, (2, 2))
        self.assertEqual(move.captured.color, Color.WHITE)

    def test_basic_moves_go_forward_only(self) -> None:
        white = Man(Color.WHITE, 5, 3)
        black = Man(Color.BLACK, 2, 2)
        board = Board.from_pieces(8, [white, black])

        self.assertEqual(sorted(m.end for m in white.basicMoves(board)), [(4, 2), (4, 4)])
        self.assertEqual(sorted(m.end for m in black.basicMoves(board)), [(3, 1), (3, 3)])
        self.assertTrue(all(m.weight == 0 for m in white.basicMoves(board)))

    def test_basic_move_onto_promotion_row_carries_bonus(self) -> None:
        white = Man(Color.WHITE, 1, 1)
        board = Board.from_pieces(8, [white, Man(Color.BLACK, 4, 4)])

        moves = white.possibleMoves(board)

        self.assertEqual(sorted(m.end for m in moves), [(0, 0), (0, 2)])
        self.assertTrue(all(m.weight == 1 for m in moves))

    def test_double_jump_yields_each_landing_with_chained_previous(self) -> None:
        white = Man(Color.WHITE, 6, 0)
        board = Board.from_pieces(8, [white, Man(Color.BLACK, 5, 1), Man(Color.BLACK, 3, 3)])

        moves = white.possibleMoves(board)

        self.assertEqual([m.end for m in moves], [(4, 2), (2, 4)])
        first, second = moves
        self.assertIs(second.previous, first)
        self.assertEqual(second.weight, 2)
        self.assertEqual([c.position for c in second.captures], [(5, 1), (3, 3)])
        self.assertEqual(second.as_path(), ((6, 0), (4, 2), (2, 4)))

    def test_capture_of_king_adds_bonus(self) -> None:
        white = Man(Color.WHITE, 5, 1)
        board = Board.from_pieces(8, [white, King(Color.BLACK, 4, 2)])

        moves = white.possibleMoves(board)

        self.assertEqual(len(moves), 1)
        self.assertEqual(moves[0].weight, 3)
        self.assertTrue(moves[0].captured.is_king)

    def test_man_may_capture_backwards_mid_chain(self) -> None:
        # Lands on the promotion row, then doubles back over a second piece.
        white = Man(Color.WHITE, 2, 4)
        board = Board.from_pieces(8, [white, Man(Color.BLACK, 1, 3), Man(Color.BLACK, 1, 1)])

        moves = {m.end: m for m in white.possibleMoves(board)}

        self.assertEqual(set(moves), {(0, 2), (2, 0)})
        self.assertEqual(moves[(0, 2)].weight, 2)
        self.assertEqual(moves[(2, 0)].weight, 2)
        self.assertIs(moves[(2, 0)].previous, moves[(0, 2)])


class KingMoveTests(unittest.TestCase):
    def test_king_slides_along_open_diagonal(self) -> None:
        king = King(Color.WHITE, 0, 0)
        board = Board.from_pieces(8, [king])

        moves = king.basicMoves(board)

        self.assertEqual([m.end for m in moves], [(i, i) for i in range(1, 8)])
        self.assertTrue(all(m.weight == 0 for m in moves))
        self.assertEqual(king.captureMoves(board), [])

    def test_king_captures_after_a_slide(self) -> None:
        king = King(Color.WHITE, 0, 0)
        board = Board.from_pieces(8, [king, Man(Color.BLACK, 3, 3)])

        moves = king.possibleMoves(board)

        self.assertEqual(len(moves), 1)
        self.assertEqual(moves[0].end, (4, 4))
        self.assertEqual(moves[0].captured.position, (3, 3))

    def test_king_is_blocked_by_two_pieces_in_a_row(self) -> None:
        king = King(Color.WHITE, 0, 0)
        board = Board.from_pieces(8, [king, Man(Color.BLACK, 3, 3), Man(Color.BLACK, 4, 4)])

        self.assertEqual(king.captureMoves(board), [])
        self.assertEqual([m.end for m in king.basicMoves(board)], [(1, 1), (2, 2)])

    def test_slide_squares_are_not_reused_as_landings(self) -> None:
        king = King(Color.WHITE, 0, 2)
        board = Board.from_pieces(
            8,
            [king, Man(Color.BLACK, 1, 3), Man(Color.BLACK, 3, 3), Man(Color.BLACK, 3, 1)],
        )

        moves = king.captureMoves(board)

        # (2, 0) would be reachable over (3, 1) but was slid over first.
        self.assertEqual([m.end for m in moves], [(2, 4), (4, 2)])
        self.assertEqual(moves[1].weight, 2)


class GeneratorInvariantTests(unittest.TestCase):
    def _assert_move_invariants(self, board: Board, piece: Piece) -> None:
        moves = piece.possibleMoves(board)
        self.assertEqual(len({m.end for m in moves}), len(moves))
        for move in moves:
            self.assertEqual(move.start, piece.position)
            row, col = move.end
            self.assertTrue(board.is_dark_square(row, col))
            self.assertIsNone(board.getPiece(row, col))
            if not move.is_capture:
                continue
            captured = [c.position for c in move.captures]
            self.assertEqual(len(set(captured)), len(captured))
            path = move.as_path()
            for (from_r, from_c), (to_r, to_c), capture in zip(path, path[1:], move.captures):
                self.assertEqual(abs(to_r - from_r), abs(to_c - from_c))
                self.assertNotEqual(capture.color, piece.color)
                dr = 1 if to_r > from_r else -1
                dc = 1 if to_c > from_c else -1
                self.assertEqual(capture.position, (to_r - dr, to_c - dc))
                if not piece.is_king:
                    self.assertEqual(abs(to_r - from_r), 2)
                r, c = from_r + dr, from_c + dc
                while (r, c) != capture.position:
                    self.assertIsNone(board.getPiece(r, c))
                    r += dr
                    c += dc

    def test_random_positions_respect_invariants(self) -> None:
        rng = random.Random(2024)
        for size in (8, 10):
            for _ in range(40):
                board = random_board(rng, size, per_side=rng.randint(2, 9))
                for piece in board.getAllPieces():
                    self._assert_move_invariants(board, piece)

    def test_generation_is_deterministic(self) -> None:
        rng = random.Random(7)
        board = random_board(rng, 10, per_side=8)
        for color in (Color.WHITE, Color.BLACK):
            self.assertEqual(board.legal_moves(color), board.copy().legal_moves(color))

    def test_side_moves_are_union_over_pieces(self) -> None:
        board = Board(8)
        expected = [m for p in board.getAllPieces(Color.WHITE) for m in p.possibleMoves(board)]
        self.assertEqual(board.legal_moves(Color.WHITE), expected)
        self.assertEqual(len(expected), 7)


if __name__ == "__main__":
    unittest.main()
