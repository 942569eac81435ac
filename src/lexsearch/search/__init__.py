"""
Prefix search primitives over an ordered string set.

- analyzers: Normalizer pipeline (humanize, tokenize, lowercase, stopwords, stemming)
- codec: ``<fragment>::<doc_id>`` entry encoding and prefix range bounds
- indexer: Fan-out/fan-in writes of a document's entries
- query: Query planning (phrase vs stemmed word)
- storage / redis_storage: Ordered-set backends
"""
