from .validate import *
