"""
Reconciliation Pipeline Steps

This directory contains the lettered steps of a reconciliation run:

a. Chunk Planning - Splits the entity list into request-sized chunks
b. Context Assembly - Builds each chunk's prompt with resolved rows and lookahead
c. Response Parsing - Validates completion status and decodes the pair array
d. Orchestration - Folds the chunks in order into one complete result table
e. Result Output - Writes result tables as CSV, JSONL or markdown

The files are lettered in the order a run passes through them.
"""
