FINDER_LIKE = (1, 0, 1, 1, 1, 0, 1, 0, 0, 0, 0)
FINDER_LIKE_REVERSED = FINDER_LIKE[::-1]


def _columns(rows):
    return [list(col) for col in zip(*rows)]


def _line_runs(line):
    score = 0
    run_length = 1
    for i in range(1, len(line)):
        if line[i] == line[i - 1]:
            run_length += 1
        else:
            if run_length >= 5:
                score += run_length - 2
            run_length = 1
    if run_length >= 5:
        score += run_length - 2
    return score


def penalty_runs(rows):
    """Rule 1: runs of five or more same colored modules"""
    return sum(_line_runs(line) for line in rows) + \
        sum(_line_runs(line) for line in _columns(rows))


def penalty_blocks(rows):
    """Rule 2: 2x2 blocks of same colored modules, overlaps counted"""
    score = 0
    for y in range(len(rows) - 1):
        row = rows[y]
        next_row = rows[y + 1]
        for x in range(len(row) - 1):
            if row[x] == row[x + 1] == next_row[x] == next_row[x + 1]:
                score += 3
    return score


def _line_finder_like(line):
    score = 0
    for i in range(len(line) - 10):
        window = tuple(line[i:i + 11])
        if window == FINDER_LIKE:
            score += 40
        if window == FINDER_LIKE_REVERSED:
            score += 40
    return score


def penalty_finder_like(rows):
    """Rule 3: 1:1:3:1:1 patterns with four light modules on one side"""
    return sum(_line_finder_like(line) for line in rows) + \
        sum(_line_finder_like(line) for line in _columns(rows))


def penalty_balance(rows):
    """Rule 4: deviation of the dark module ratio from one half"""
    total = sum(len(row) for row in rows)
    dark = sum(sum(row) for row in rows)
    previous_five = 5 * (20 * dark // total)
    next_five = previous_five + 5
    return 2 * min(abs(previous_five - 50), abs(next_five - 50))


def penalty(rows):
    return penalty_runs(rows) + penalty_blocks(rows) + \
        penalty_finder_like(rows) + penalty_balance(rows)
