#!/usr/bin/env python3

import textesa

s = textesa.suffix("abracadabra")
print(s.node_num)
print(s.suffix_array)

for substring, freq in s:
    print(repr(substring), freq)

"""
The output is:

5
[10  7  0  3  5  8  1  4  6  9  2]
'abra' 2
'a' 5
'bra' 2
'ra' 2
'' 11
"""
