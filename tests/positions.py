from connect_four.engine.board import ROWS

# Row by row from the bottom; the rows fill as A A B B A A B / B B A A B B A.
# The final board has no 4-in-a-row anywhere, so the last move is a draw.
DRAW_SEQUENCE = [0, 2, 1, 3, 4, 6, 5] * ROWS

# B to move with B on (5,1) (5,2) (5,3); (5,0) belongs to A, (5,4) is open.
B_HORIZONTAL_THREAT = [0, 1, 1, 2, 2, 3, 6]

# B to move while A threatens (5,3) with (5,0) (5,1) (5,2).
A_HORIZONTAL_THREAT = [0, 0, 1, 1, 2]
