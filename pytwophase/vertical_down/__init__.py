from .vertical_down import *
