"""Domain models: slides, actions, motion descriptors, render tree, config"""
