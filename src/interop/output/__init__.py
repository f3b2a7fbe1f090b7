"""Result formatting for human (rich) and machine (JSON) output."""
