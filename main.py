import asyncio
import logging
import pygame
from tetris_config import CONFIG
from tetris_game import Game, GameState
from tetris_render import PygameView, RenderAssets, compute_dims


PRESS = {
    pygame.K_LEFT: "on_left_pressed",
    pygame.K_RIGHT: "on_right_pressed",
    pygame.K_UP: "on_up_pressed",
    pygame.K_DOWN: "on_down_pressed",
    pygame.K_p: "pause",
}
RELEASE = {
    pygame.K_LEFT: "on_left_released",
    pygame.K_RIGHT: "on_right_released",
    pygame.K_DOWN: "on_down_released",
}


async def main():
    pygame.init()
    pygame.event.set_allowed([pygame.QUIT, pygame.KEYDOWN, pygame.KEYUP])

    dims = compute_dims()
    screen = pygame.display.set_mode((dims.total_w, dims.total_h))
    pygame.display.set_caption("Falling Blocks")
    assets = RenderAssets(dims, pygame.font.SysFont(None, 26))

    view = PygameView()
    game = Game(view)
    game.start()

    try:
        while True:
            for e in pygame.event.get():
                if e.type == pygame.QUIT:
                    return
                if e.type == pygame.KEYDOWN:
                    if e.key == pygame.K_r and game.state is GameState.GAME_OVER:
                        game.start()
                    elif e.key in PRESS:
                        getattr(game, PRESS[e.key])()
                if e.type == pygame.KEYUP and e.key in RELEASE:
                    getattr(game, RELEASE[e.key])()

            view.draw(screen, assets, paused=game.paused)
            pygame.display.flip()
            await asyncio.sleep(1 / CONFIG["FPS"])
    finally:
        game.stop()
        pygame.quit()


def run():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    asyncio.run(main())


if __name__ == '__main__':
    run()
