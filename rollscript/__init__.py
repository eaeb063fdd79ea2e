#a small dice-rolling scripting language

__version__ = "0.1.0"
