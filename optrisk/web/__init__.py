"""HTTP interface for the strategy analyzer."""
