#!/usr/bin/env python3

import numpy as np
import textesa

a = np.frombuffer(b"banana", dtype=np.uint8)
print(a)

suffix_array = textesa.create_suffix_array(a)
print(suffix_array)

for i in suffix_array:
    print(a[i:].tobytes().decode("utf-8"))

"""
The output is:

[ 98  97 110  97 110  97]
[5 3 1 0 4 2]
a
ana
anana
banana
na
nana
"""
