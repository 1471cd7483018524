from stockroom.take.outcome import Failure, Outcome, Success
from stockroom.take.processor import TakeItemProcessor, TakeReceipt, TakeRequest

__all__ = ["Failure", "Outcome", "Success", "TakeItemProcessor", "TakeReceipt", "TakeRequest"]
