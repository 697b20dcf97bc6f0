from record_classifier.runners.local import LocalClassifier
from record_classifier.runners.parallel import ParallelClassifier

__all__ = ["LocalClassifier", "ParallelClassifier"]
