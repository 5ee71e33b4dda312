"""A falling-blocks puzzle game with keyboard and gamepad support."""