"""JSON-RPC transport, response models and account, transaction and block methods."""