"""Identity Document OCR System.

Extracts the holder's name and the document number from photographs of
Aadhaar and PAN cards using OpenCV preprocessing, a multi-mode Tesseract
sweep, and heuristic field parsing.
"""
