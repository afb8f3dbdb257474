__author__ = "FaceSwap Pro developers"
__license__ = "MIT License"
__version__ = "1.0.0"
