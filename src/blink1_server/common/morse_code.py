"""International morse code encoding"""

import logging
from typing import Dict

logger = logging.getLogger(__name__)

DOT = "."
DASH = "-"
LETTER_GAP = " "
WORD_GAP = "/"

MORSE_TABLE: Dict[str, str] = {
    "A": ".-",
    "B": "-...",
    "C": "-.-.",
    "D": "-..",
    "E": ".",
    "F": "..-.",
    "G": "--.",
    "H": "....",
    "I": "..",
    "J": ".---",
    "K": "-.-",
    "L": ".-..",
    "M": "--",
    "N": "-.",
    "O": "---",
    "P": ".--.",
    "Q": "--.-",
    "R": ".-.",
    "S": "...",
    "T": "-",
    "U": "..-",
    "V": "...-",
    "W": ".--",
    "X": "-..-",
    "Y": "-.--",
    "Z": "--..",
    "0": "-----",
    "1": ".----",
    "2": "..---",
    "3": "...--",
    "4": "....-",
    "5": ".....",
    "6": "-....",
    "7": "--...",
    "8": "---..",
    "9": "----.",
    ".": ".-.-.-",
    ",": "--..--",
    "?": "..--..",
    "'": ".----.",
    "!": "-.-.--",
    "/": "-..-.",
    "(": "-.--.",
    ")": "-.--.-",
    "&": ".-...",
    ":": "---...",
    ";": "-.-.-.",
    "=": "-...-",
    "+": ".-.-.",
    "-": "-....-",
    "_": "..--.-",
    '"': ".-..-.",
    "$": "...-..-",
    "@": ".--.-.",
}


def encode(message: str) -> str:
    """Encode text as morse.

    Letters are separated by a single space and words by "/", so "sos"
    becomes "... --- ..." and "hi you" becomes ".... .. / -.-- --- ..-".
    Characters without a morse code are dropped.
    """
    words = []
    for word in message.upper().split():
        letters = []
        for char in word:
            code = MORSE_TABLE.get(char)
            if code is None:
                logger.debug(f"No morse code for {char!r}, skipping")
                continue
            letters.append(code)
        if letters:
            words.append(LETTER_GAP.join(letters))
    return f"{LETTER_GAP}{WORD_GAP}{LETTER_GAP}".join(words)


def symbol_weight(symbol: str) -> int:
    """Length of a symbol in morse units; gaps weigh nothing"""
    if symbol == DASH:
        return 2
    if symbol == DOT:
        return 1
    return 0
