from .vertical_up import *
