# infrastructure/adapters/tokenizers/huggingface_adapter.py
import logging
import threading

from transformers import AutoTokenizer

from core.ports.tokenizer_port import TokenizerPort

logger = logging.getLogger(__name__)


class HuggingFaceTokenizerAdapter(TokenizerPort):
    """
    Counts tokens with a Hugging Face tokenizer.
    The tokenizer is loaded on first use and reused afterwards.
    """

    def __init__(self, tokenizer_name: str = "Xenova/gpt-4o"):
        self.tokenizer_name = tokenizer_name
        self._tokenizer = None
        self._init_lock = threading.Lock()

    def _get_tokenizer(self):
        with self._init_lock:
            if self._tokenizer is None:
                logger.info("Loading tokenizer: %s", self.tokenizer_name)
                self._tokenizer = AutoTokenizer.from_pretrained(self.tokenizer_name)
                logger.info("Tokenizer %s loaded successfully", self.tokenizer_name)
            return self._tokenizer

    def count(self, text: str) -> int:
        if not text:
            return 0
        return len(self._get_tokenizer().encode(text, add_special_tokens=False))
