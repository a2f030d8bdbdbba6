CONFIG = {
    "CELL_SIZE": 32,
    "FPS": 60,
    "BASE_DELAY_MS": 800,
    "DELAY_STEP_MS": 50,
    "MOVE_REPEAT_MS": 100,
    "DOWN_REPEAT_MS": 30,
    "LINE_AWARD": 100,
    "SPEED_UP_AWARD": 1,
    "LINES_PER_LEVEL": 10,
}
