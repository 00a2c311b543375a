# renderer/preview.py
import numpy as np
import pygame


def show_preview(pixels: np.ndarray, title: str = "Path Tracer"):
    """
    Open a window showing a finished render and block until it is closed
    (window close button or Escape).
    """
    height, width, _ = pixels.shape
    pygame.init()
    try:
        screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(title)
        # surfarray is indexed (x, y), the buffer (y, x).
        surface = pygame.surfarray.make_surface(np.ascontiguousarray(pixels.swapaxes(0, 1)))
        screen.blit(surface, (0, 0))
        pygame.display.flip()

        clock = pygame.time.Clock()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False
            clock.tick(30)
    finally:
        pygame.quit()
