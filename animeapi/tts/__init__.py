"""The text-to-speech interface and a speech URL lookup."""