# -*- coding: utf-8 -*-
from enum import Enum

class TrackKind(Enum):
    HANZI = 'hanzi'
    PINYIN = 'pinyin'
    ENGLISH = 'english'
    OTHER = 'other'
