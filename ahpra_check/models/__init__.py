"""Result types shared by every validator."""
