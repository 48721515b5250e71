"""
Model utilities package.

This package contains the preprocessing pipeline and helpers for training,
evaluating and predicting with it. Typical entrypoints are:

- dsblog.models.train.train_model()              : grid search, evaluation and artifact saving
- dsblog.models.evaluate.leakage_comparison()    : CV error with and without preprocessing leakage
- dsblog.models.predict.predict_price()          : load the saved pipeline and return predictions
"""
