from .line import *
