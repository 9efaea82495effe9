"""Load the public AWS price list documents into a relational database."""
