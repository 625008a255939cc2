# This directory contains the core logic of the service:
# - Field encryption (cipher) and the at-rest record codec
# - Partial update building for conditional writes
# - The item store that ties them to the storage table
