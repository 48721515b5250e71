"""
Features package for the missing-data walkthrough.

- build_features: column pruning recipe and nullity summaries.
- plots: missingno matrix, bar, heatmap and dendrogram figures.
"""
