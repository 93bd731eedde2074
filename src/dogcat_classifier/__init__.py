"""Dog vs cat image classification on top of a general image classifier."""
