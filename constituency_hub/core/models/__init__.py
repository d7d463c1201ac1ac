"""Request and response models shared by the server and the client."""
