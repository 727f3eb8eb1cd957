from archiexport.exchange.serializer import ARCHIMATE_NS, ExchangeSerializer, serialize_model

__all__ = ["ARCHIMATE_NS", "ExchangeSerializer", "serialize_model"]
