"""Wire layer: SOAP envelopes, response parsing, and ZOQL text.

Pure XML/text helpers over ``xml.etree.ElementTree``. No I/O.
"""
