from .horizontal import *
