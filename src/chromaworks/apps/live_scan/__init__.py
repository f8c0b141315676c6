"""Live colour scanning from camera feeds and still photos."""
